"""Reconstruction of nested lists from indentation."""

from dataclasses import dataclass
import logging

from mdadf.constants import LOGGER_NAME, LineKind, ListKind
from mdadf.exceptions import ListParsingException
from mdadf.models import BulletList, ListItem, OrderedList, Paragraph, Text
from mdadf.utils.block_parser import BULLET_PATTERN, ORDERED_PATTERN, leading_spaces
from mdadf.utils.inline_parser import parse_inline_formatting

logger = logging.getLogger(LOGGER_NAME)


@dataclass(frozen=True)
class ListLine:
    indent: int
    content: str
    raw: str
    kind: LineKind


def parse_list_line(line: str) -> ListLine:
    """Splits a list line into its indentation, marker-stripped text and marker kind."""

    if match := BULLET_PATTERN.match(line):
        kind, content = LineKind.BULLET, match.group(2)
    elif match := ORDERED_PATTERN.match(line):
        kind, content = LineKind.ORDERED, match.group(2)
    else:
        kind, content = LineKind.PARAGRAPH, line
    return ListLine(indent=leading_spaces(line), content=content.strip(), raw=line, kind=kind)


def _item_paragraph(content: str) -> Paragraph:
    # NOTE: an item without text still needs its paragraph; use a single empty text node.
    return Paragraph(tuple(parse_inline_formatting(content)) or (Text(''),))


def _make_list(kind: ListKind, items: list[ListItem]) -> BulletList | OrderedList | None:
    if not items:
        return None
    if kind is ListKind.ORDERED:
        return OrderedList(tuple(items))
    return BulletList(tuple(items))


def _build_items(lines: list[ListLine], baseline: int) -> list[ListItem]:
    items: list[ListItem] = []
    index = 0

    while index < len(lines):
        line = lines[index]

        if line.indent < baseline:
            break

        if line.indent > baseline:
            # NOTE: deeper items that do not directly follow an item at this level are dropped.
            logger.debug(f'Skipping list item with irregular indentation: {line.raw!r}')
            index += 1
            continue

        run_end = index + 1
        while run_end < len(lines) and lines[run_end].indent > baseline:
            run_end += 1

        nested = _build_nested(lines[index + 1 : run_end])
        items.append(ListItem(_item_paragraph(line.content), nested))
        index = run_end

    return items


def _build_nested(run: list[ListLine]) -> BulletList | OrderedList | None:
    if not run:
        return None
    kind = ListKind.ORDERED if run[0].kind is LineKind.ORDERED else ListKind.BULLET
    return _make_list(kind, _build_items(run, min(line.indent for line in run)))


def build_nested_list(lines: list[str], kind: ListKind) -> BulletList | OrderedList | None:
    """Builds a (possibly nested) list from the raw lines of a list group.

    Items indented deeper than the item before them become a nested list of that item. The kind of a nested
    list follows the marker of its first item, independently of the parent list.

    Args:
        lines: the raw list lines, indentation included.
        kind: the kind of the outermost list.

    Returns:
        The list node, or None when no item could be built.
    """

    if not lines:
        return None

    parsed = [parse_list_line(line) for line in lines]
    if any(line.kind is LineKind.PARAGRAPH for line in parsed):
        raise ListParsingException(
            'List group contains a line without a list marker.',
            extra={'lines': [line.raw for line in parsed if line.kind is LineKind.PARAGRAPH]},
        )

    baseline = min(line.indent for line in parsed)
    return _make_list(kind, _build_items(parsed, baseline))
