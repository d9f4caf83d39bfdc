import json
import logging
from pathlib import Path
import sys

import click
from pydantic import ValidationError
from pythonjsonlogger.json import JsonFormatter
from rich.console import Console

from mdadf.config import CONFIGURATION, ApplicationConfiguration
from mdadf.constants import LOGGER_NAME
from mdadf.converter import convert
from mdadf.files import get_log_file
from mdadf.utils.adf_helpers import convert_adf_to_markdown

console = Console(stderr=True)
logger = logging.getLogger(LOGGER_NAME)


def setup_logging() -> None:
    settings = CONFIGURATION.get()
    logger.setLevel(settings.log_level or logging.WARNING)

    if settings.log_file == '':
        return
    if settings.log_file:
        log_file = Path(settings.log_file).resolve()
    else:
        log_file = get_log_file()

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_file:
            return

    try:
        fh = logging.FileHandler(log_file)
    except Exception as e:
        logger.warning(f'Failed to create log file handler: {e}')
    else:
        fh.setLevel(settings.log_level or logging.WARNING)
        fh.setFormatter(
            JsonFormatter('%(asctime)s %(levelname)s %(message)s %(lineno)s %(module)s %(pathname)s ')
        )
        logger.addHandler(fh)


def read_input(source: str) -> str:
    if source == '-':
        return sys.stdin.read()
    return Path(source).read_text(encoding='utf-8')


def render_output(adf: dict, output_format: str | None = None, indent: int | None = None) -> str:
    """Renders a converted document using the active configuration for anything not given explicitly."""

    settings = CONFIGURATION.get()
    if (output_format or settings.output_format) == 'markdown':
        return convert_adf_to_markdown(adf)
    return json.dumps(
        adf,
        indent=indent if indent is not None else settings.json_indent,
        ensure_ascii=settings.ensure_ascii,
    )


@click.command()
@click.argument('source', default='-', type=click.Path(dir_okay=False, allow_dash=True))
@click.option(
    '--output',
    '-o',
    default=None,
    type=click.Path(dir_okay=False, writable=True),
    help='Write the result to this file instead of stdout.',
)
@click.option(
    '--format',
    '-f',
    'output_format',
    default=None,
    type=click.Choice(['json', 'markdown']),
    help='Print the ADF document as JSON, or a markdown preview of it.',
)
@click.option(
    '--indent',
    '-i',
    default=None,
    type=click.IntRange(0, 8),
    help='Number of spaces used to indent JSON output.',
)
@click.option(
    '--version',
    is_flag=True,
    default=False,
    help='Show the version of the tool.',
)
def cli(
    source: str = '-',
    output: str | None = None,
    output_format: str | None = None,
    indent: int | None = None,
    version: bool = False,
):
    """Converts markdown from SOURCE (a file, or - for stdin) to Atlassian Document Format."""

    if version:
        from importlib.metadata import version as get_version

        click.echo(get_version('mdadf'))
        return

    try:
        settings = ApplicationConfiguration()
    except ValidationError as e:
        console.print('Configuration validation error. Make sure your config file is correct.')
        for _e in e.errors():
            if location := _e.get('loc'):
                console.print(f'Configuration error at {location[0]}: {_e.get("msg")}')
            else:
                console.print(f'Configuration error: {_e.get("msg")}')
        sys.exit(1)

    token = CONFIGURATION.set(settings)
    try:
        setup_logging()

        try:
            text = read_input(source)
        except (OSError, UnicodeDecodeError) as e:
            console.print(f'[bold red]Unable to read input:[/bold red] {e}')
            sys.exit(1)

        adf = convert(text)
        logger.info(f'Converted {len(text)} characters into {len(adf["content"])} block(s)')

        result = render_output(adf, output_format, indent)

        if output:
            Path(output).write_text(result + '\n', encoding='utf-8')
        else:
            click.echo(result)
    finally:
        CONFIGURATION.reset(token)


def mdadfCLI():
    cli()


if __name__ == '__main__':
    mdadfCLI()
