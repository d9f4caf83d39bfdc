import os
from pathlib import Path

from mdadf.constants import APPLICATION_DIRECTORY_NAME, CONFIG_FILE_FILE_NAME, LOG_FILE_FILE_NAME


def _xdg_directory(variable: str, fallback: str) -> Path:
    if value := os.getenv(variable):
        return Path(value).expanduser()
    return Path.home() / fallback


def get_config_directory() -> Path:
    return _xdg_directory('XDG_CONFIG_HOME', '.config') / APPLICATION_DIRECTORY_NAME


def get_config_file() -> Path:
    """Returns the path of the YAML configuration file. The file may not exist."""

    return get_config_directory() / CONFIG_FILE_FILE_NAME


def get_log_file() -> Path:
    """Returns the path of the default log file, creating its directory when needed."""

    directory = _xdg_directory('XDG_STATE_HOME', '.local/state') / APPLICATION_DIRECTORY_NAME
    directory.mkdir(parents=True, exist_ok=True)
    return directory / LOG_FILE_FILE_NAME
