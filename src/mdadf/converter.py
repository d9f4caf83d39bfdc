"""Markdown to Atlassian Document Format (ADF) conversion.

Converts informally written markdown into an ADF document for Jira and Confluence rich-text fields. Supported
syntax:

- Headers (H1-H6): `#`, `##`, ...
- Text formatting: `**bold**`, `*italic*`, `` `code` ``, `~~strikethrough~~`
- Links: `[text](url)` and bare `http(s)://` URLs
- Bullet (`-`) and numbered (`1.`) lists, nested by indentation
- Tables with pipe-delimited rows
- Fenced code blocks with an optional language
- Blockquotes (`> `) and horizontal rules (`---`)

Conversion is best effort and never raises: whatever goes wrong, the original text ends up in the document.
"""

import logging
import re
from typing import Any, Callable

from mdadf.constants import DEFAULT_CODE_BLOCK_LANGUAGE, LOGGER_NAME, GroupKind, ListKind
from mdadf.exceptions import InvalidNodeException
from mdadf.models import (
    Blockquote,
    BlockNode,
    CodeBlock,
    Document,
    Heading,
    Paragraph,
    Rule,
    Text,
)
from mdadf.utils.block_parser import LineGroup, group_lines
from mdadf.utils.inline_parser import parse_inline_formatting
from mdadf.utils.list_builder import build_nested_list
from mdadf.utils.table_builder import build_table

logger = logging.getLogger(LOGGER_NAME)

# Only newlines separate lines; form feeds and other separators stay part of the line.
LINE_BREAK_PATTERN = re.compile(r'\r?\n')


def _convert_paragraph(group: LineGroup) -> Paragraph | None:
    content = parse_inline_formatting(' '.join(group.lines))
    return Paragraph(tuple(content)) if content else None


def _convert_header(group: LineGroup) -> Heading | None:
    content = parse_inline_formatting(group.lines[0]) if group.lines else []
    if not content:
        return None
    try:
        return Heading(group.level or 0, tuple(content))
    except InvalidNodeException as e:
        logger.debug(f'Discarding heading: {e}', extra=e.extra)
        return None


def _convert_blockquote(group: LineGroup) -> Blockquote | None:
    content = parse_inline_formatting('\n'.join(group.lines))
    return Blockquote(Paragraph(tuple(content))) if content else None


def _convert_code_block(group: LineGroup) -> CodeBlock:
    return CodeBlock('\n'.join(group.lines), group.language or DEFAULT_CODE_BLOCK_LANGUAGE)


_GROUP_CONVERTERS: dict[GroupKind, Callable[[LineGroup], BlockNode | None]] = {
    GroupKind.PARAGRAPH: _convert_paragraph,
    GroupKind.HEADER: _convert_header,
    GroupKind.BULLET_LIST: lambda group: build_nested_list(group.lines, ListKind.BULLET),
    GroupKind.ORDERED_LIST: lambda group: build_nested_list(group.lines, ListKind.ORDERED),
    GroupKind.BLOCKQUOTE: _convert_blockquote,
    GroupKind.RULE: lambda group: Rule(),
    GroupKind.TABLE: lambda group: build_table(group.lines),
    GroupKind.CODE_BLOCK: _convert_code_block,
}


def convert_group(group: LineGroup) -> BlockNode | None:
    """Converts a group of similar lines into its block node, or None when the group produces nothing."""

    return _GROUP_CONVERTERS[group.kind](group)


def parse_block_elements(text: str) -> list[BlockNode]:
    """Parses markdown text into block nodes, skipping groups that produce nothing."""

    if not text or not text.strip():
        return []

    groups = group_lines(LINE_BREAK_PATTERN.split(text))
    logger.debug(f'Grouped markdown into {len(groups)} line group(s)')

    blocks = []
    for group in groups:
        if (node := convert_group(group)) is not None:
            blocks.append(node)
    return blocks


def parse_document(text: str | None) -> Document:
    """Converts markdown text into a typed ADF document.

    Args:
        text: markdown or plain text. None and blank strings produce an empty document.

    Returns:
        The document. When nothing could be parsed, or parsing failed, the document holds a single paragraph with
        the original text verbatim.
    """

    if text is None:
        return Document()
    if not isinstance(text, str):
        text = str(text)
    if not text.strip():
        return Document()

    try:
        blocks = parse_block_elements(text)
    except Exception as e:
        logger.exception(f'Failed to convert markdown, falling back to plain text: {e}')
        blocks = []

    if not blocks:
        logger.debug('No block produced, wrapping the original text in a paragraph')
        return _verbatim_document(text)

    return Document(tuple(blocks))


def _verbatim_document(text: str) -> Document:
    return Document((Paragraph((Text(text),)),))


def convert(text: str | None) -> dict[str, Any]:
    """Converts markdown text to an ADF document ready for JSON serialization.

    Args:
        text: markdown or plain text string.

    Returns:
        The ADF document as a dictionary with `version`, `type` and `content` keys.
    """

    document = parse_document(text)
    try:
        return document.to_adf()
    except Exception as e:
        # Very deep list nesting can exhaust the interpreter stack while serializing.
        logger.exception(f'Failed to serialize document, falling back to plain text: {e}')
        return _verbatim_document(text if isinstance(text, str) else str(text)).to_adf()


markdown_to_adf = convert
text_to_adf = convert
