from enum import Enum

LOGGER_NAME = 'mdadf'
"""Application logger name identifier."""

LOG_FILE_FILE_NAME = 'mdadf.log'
"""Default log file name."""

CONFIG_FILE_FILE_NAME = 'config.yaml'
"""Default configuration file name."""

APPLICATION_DIRECTORY_NAME = 'mdadf'
"""Name of the directory used under the XDG config and state directories."""

ADF_DOCUMENT_VERSION = 1
"""The version tag of every generated document."""

DEFAULT_CODE_BLOCK_LANGUAGE = 'text'
"""Language assigned to a fenced code block that does not declare one."""

CODE_FENCE = '```'
"""Delimiter that opens and closes a literal code block."""

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6

TABLE_LAYOUT = 'default'
"""Layout attribute of every generated table."""

MEDIA_SINGLE_LAYOUT = 'center'
"""Layout attribute of every generated mediaSingle node."""


class ListKind(Enum):
    BULLET = 'bulletList'
    ORDERED = 'orderedList'


class MarkType(Enum):
    STRONG = 'strong'
    EM = 'em'
    CODE = 'code'
    STRIKE = 'strike'
    LINK = 'link'


class MatchKind(Enum):
    """Inline formatting span kinds recognized in a text fragment."""

    BOLD = 'bold'
    ITALIC = 'italic'
    CODE = 'code'
    CUSTOM_LINK = 'custom-link'
    URL = 'url'
    STRIKE = 'strike'


class LineKind(Enum):
    """Block-level categories assigned to a single line of input."""

    FENCE_OPEN = 'fence-open'
    FENCE_CONTENT = 'fence-content'
    FENCE_CLOSE = 'fence-close'
    HEADER = 'header'
    BULLET = 'bullet'
    ORDERED = 'ordered'
    BLOCKQUOTE = 'blockquote'
    RULE = 'rule'
    TABLE_ROW = 'table-row'
    BLANK = 'blank'
    PARAGRAPH = 'paragraph'


class GroupKind(Enum):
    """Kinds of line groups produced by the block grouper."""

    PARAGRAPH = 'paragraph'
    HEADER = 'header'
    BULLET_LIST = 'bulletList'
    ORDERED_LIST = 'orderedList'
    BLOCKQUOTE = 'blockquote'
    RULE = 'rule'
    TABLE = 'table'
    CODE_BLOCK = 'codeBlock'
