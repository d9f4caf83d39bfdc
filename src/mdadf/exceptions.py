from typing import Any


class ConversionException(Exception):
    """General conversion exception, whenever a specific reason can't be determined."""

    extra: dict[str, Any] = {}

    def __init__(self, *args, **kwargs):
        self.extra = kwargs.pop('extra', self.extra)
        super().__init__(*args)


class InvalidNodeException(ConversionException):
    pass


class InlineParsingException(ConversionException):
    pass


class ListParsingException(ConversionException):
    pass
