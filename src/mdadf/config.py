from contextvars import ContextVar
import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from mdadf.files import get_config_file


class ApplicationConfiguration(BaseSettings):
    """The configuration for the mdadf CLI tool."""

    log_file: str | None = None
    """The filename of the log file to use. If you set an empty string logging to a file is disabled."""
    log_level: str = 'WARNING'
    """The log level to use. Use Python's `logging` names: `CRITICAL`, `FATAL`, `ERROR`, `WARN`, `WARNING`, `INFO`,
    `DEBUG` and `NOTSET`."""
    output_format: Literal['json', 'markdown'] = 'json'
    """The default output of the CLI: the ADF document as JSON, or a markdown preview of the document."""
    json_indent: int | None = Field(default=None, ge=0, le=8)
    """Number of spaces used to indent JSON output. When this is not set the JSON is printed on a single line."""
    ensure_ascii: bool = False
    """If True non-ASCII characters are escaped in JSON output."""

    model_config = SettingsConfigDict(
        extra='ignore',
        validate_assignment=True,
        env_prefix='MDADF_',
        env_nested_delimiter='__',
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        """Accept level names in any case and reject unknown names."""
        if isinstance(v, str):
            v = v.upper()
            if v not in logging.getLevelNamesMapping():
                raise ValueError(f'Unknown log level: {v}')
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        if mdadf_config_file := os.getenv('MDADF_CONFIG_FILE'):
            conf_file = Path(mdadf_config_file).resolve()
        else:
            conf_file = get_config_file()

        if conf_file.exists():
            return (
                init_settings,
                env_settings,
                dotenv_settings,
                YamlConfigSettingsSource(settings_cls, yaml_file=conf_file),
            )
        else:
            return (
                init_settings,
                env_settings,
                dotenv_settings,
            )


CONFIGURATION: ContextVar[ApplicationConfiguration] = ContextVar('configuration')
