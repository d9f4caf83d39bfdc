"""Reconstruction of tables from pipe-delimited lines."""

import logging
import re

from mdadf.constants import LOGGER_NAME
from mdadf.models import Paragraph, Table, TableCell, TableHeader, TableRow, Text
from mdadf.utils.inline_parser import parse_inline_formatting

logger = logging.getLogger(LOGGER_NAME)

SEPARATOR_ROW_PATTERN = re.compile(r'^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$')


def is_separator_row(line: str) -> bool:
    return SEPARATOR_ROW_PATTERN.match(line) is not None


def split_cells(line: str) -> list[str]:
    """Splits a table line on `|`, dropping the empty cells created by leading and trailing pipes.

    Interior empty cells are preserved.
    """

    stripped = line.strip()
    cells = stripped.split('|')
    if stripped.startswith('|'):
        cells = cells[1:]
    if stripped.endswith('|') and cells:
        cells = cells[:-1]
    return cells


def _cell_paragraph(cell: str) -> Paragraph:
    content = cell.strip()
    if not content:
        return Paragraph((Text(''),))
    return Paragraph(tuple(parse_inline_formatting(content)))


def build_table(lines: list[str]) -> Table | None:
    """Builds a table from the lines of a table group.

    Separator rows are dropped. The first remaining row is the header row and every following row is a data row,
    whether or not a separator row was present. Column counts are not validated.

    Returns:
        The table node, or None when no row remains.
    """

    rows: list[TableRow] = []
    for line in lines:
        if is_separator_row(line):
            continue

        cells = split_cells(line)
        if not cells:
            logger.debug(f'Skipping table line without cells: {line!r}')
            continue

        paragraphs = [_cell_paragraph(cell) for cell in cells]
        if not rows:
            rows.append(TableRow(tuple(TableHeader(p) for p in paragraphs)))
        else:
            rows.append(TableRow(tuple(TableCell(p) for p in paragraphs)))

    if not rows:
        return None
    return Table(tuple(rows))
