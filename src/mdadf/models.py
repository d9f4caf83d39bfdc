"""Typed node model of an Atlassian Document Format (ADF) document.

Every node is an immutable value. `to_adf()` serializes a node into the plain dictionary shape expected by
Jira and Confluence rich-text fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any, ClassVar, Union

from mdadf.constants import (
    ADF_DOCUMENT_VERSION,
    DEFAULT_CODE_BLOCK_LANGUAGE,
    MAX_HEADING_LEVEL,
    MEDIA_SINGLE_LAYOUT,
    MIN_HEADING_LEVEL,
    TABLE_LAYOUT,
    ListKind,
    MarkType,
)
from mdadf.exceptions import InvalidNodeException


@dataclass(frozen=True)
class AdfNode:
    def to_adf(self) -> dict[str, Any]:
        """Dumps the node into its ADF dictionary representation."""

        raise NotImplementedError


@dataclass(frozen=True)
class Mark(AdfNode):
    type: MarkType
    href: str | None = None

    def __post_init__(self):
        if self.type is MarkType.LINK and not self.href:
            raise InvalidNodeException('A link mark requires an href.')

    def to_adf(self) -> dict[str, Any]:
        if self.type is MarkType.LINK:
            return {'type': self.type.value, 'attrs': {'href': self.href}}
        return {'type': self.type.value}

    @classmethod
    def strong(cls) -> Mark:
        return cls(MarkType.STRONG)

    @classmethod
    def em(cls) -> Mark:
        return cls(MarkType.EM)

    @classmethod
    def code(cls) -> Mark:
        return cls(MarkType.CODE)

    @classmethod
    def strike(cls) -> Mark:
        return cls(MarkType.STRIKE)

    @classmethod
    def link(cls, href: str) -> Mark:
        return cls(MarkType.LINK, href=href)


@dataclass(frozen=True)
class Text(AdfNode):
    text: str
    marks: tuple[Mark, ...] = ()

    def to_adf(self) -> dict[str, Any]:
        node: dict[str, Any] = {'type': 'text', 'text': self.text}
        # NOTE: plain runs carry no `marks` field at all.
        if self.marks:
            node['marks'] = [mark.to_adf() for mark in self.marks]
        return node


@dataclass(frozen=True)
class Paragraph(AdfNode):
    content: tuple[Text, ...]

    def __post_init__(self):
        if not self.content:
            raise InvalidNodeException('A paragraph requires at least one inline node.')

    def to_adf(self) -> dict[str, Any]:
        return {'type': 'paragraph', 'content': [node.to_adf() for node in self.content]}


@dataclass(frozen=True)
class Heading(AdfNode):
    level: int
    content: tuple[Text, ...]

    def __post_init__(self):
        if not MIN_HEADING_LEVEL <= self.level <= MAX_HEADING_LEVEL:
            raise InvalidNodeException(
                f'Heading level must be between {MIN_HEADING_LEVEL} and {MAX_HEADING_LEVEL}.',
                extra={'level': self.level},
            )
        if not self.content:
            raise InvalidNodeException('A heading requires at least one inline node.')

    def to_adf(self) -> dict[str, Any]:
        return {
            'type': 'heading',
            'attrs': {'level': self.level},
            'content': [node.to_adf() for node in self.content],
        }


@dataclass(frozen=True)
class ListItem(AdfNode):
    """A list item: exactly one paragraph, optionally followed by one nested list."""

    paragraph: Paragraph
    nested: BulletList | OrderedList | None = None

    def __post_init__(self):
        if self.nested is not None and not isinstance(self.nested, (BulletList, OrderedList)):
            raise InvalidNodeException(
                'The nested child of a list item must be a list.',
                extra={'nested': type(self.nested).__name__},
            )

    def to_adf(self) -> dict[str, Any]:
        content = [self.paragraph.to_adf()]
        if self.nested is not None:
            content.append(self.nested.to_adf())
        return {'type': 'listItem', 'content': content}


@dataclass(frozen=True)
class _ListNode(AdfNode):
    items: tuple[ListItem, ...]

    kind: ClassVar[ListKind]

    def __post_init__(self):
        if not self.items:
            raise InvalidNodeException(f'A {self.kind.value} requires at least one item.')

    def to_adf(self) -> dict[str, Any]:
        return {'type': self.kind.value, 'content': [item.to_adf() for item in self.items]}


@dataclass(frozen=True)
class BulletList(_ListNode):
    kind: ClassVar[ListKind] = ListKind.BULLET


@dataclass(frozen=True)
class OrderedList(_ListNode):
    kind: ClassVar[ListKind] = ListKind.ORDERED


@dataclass(frozen=True)
class CodeBlock(AdfNode):
    text: str
    language: str = DEFAULT_CODE_BLOCK_LANGUAGE

    def to_adf(self) -> dict[str, Any]:
        return {
            'type': 'codeBlock',
            'attrs': {'language': self.language or DEFAULT_CODE_BLOCK_LANGUAGE},
            'content': [{'type': 'text', 'text': self.text}],
        }


@dataclass(frozen=True)
class Blockquote(AdfNode):
    paragraph: Paragraph

    def to_adf(self) -> dict[str, Any]:
        return {'type': 'blockquote', 'content': [self.paragraph.to_adf()]}


@dataclass(frozen=True)
class Rule(AdfNode):
    def to_adf(self) -> dict[str, Any]:
        return {'type': 'rule'}


@dataclass(frozen=True)
class TableHeader(AdfNode):
    paragraph: Paragraph

    def to_adf(self) -> dict[str, Any]:
        return {'type': 'tableHeader', 'attrs': {}, 'content': [self.paragraph.to_adf()]}


@dataclass(frozen=True)
class TableCell(AdfNode):
    paragraph: Paragraph

    def to_adf(self) -> dict[str, Any]:
        return {'type': 'tableCell', 'attrs': {}, 'content': [self.paragraph.to_adf()]}


@dataclass(frozen=True)
class TableRow(AdfNode):
    cells: tuple[TableHeader | TableCell, ...]

    def __post_init__(self):
        if not self.cells:
            raise InvalidNodeException('A table row requires at least one cell.')

    def to_adf(self) -> dict[str, Any]:
        return {'type': 'tableRow', 'content': [cell.to_adf() for cell in self.cells]}


@dataclass(frozen=True)
class Table(AdfNode):
    rows: tuple[TableRow, ...]

    def __post_init__(self):
        if not self.rows:
            raise InvalidNodeException('A table requires at least one row.')

    def to_adf(self) -> dict[str, Any]:
        return {
            'type': 'table',
            'attrs': {'isNumberColumnEnabled': False, 'layout': TABLE_LAYOUT},
            'content': [row.to_adf() for row in self.rows],
        }


@dataclass(frozen=True)
class MediaSingle(AdfNode):
    """An externally hosted image. Never produced by the markdown parser."""

    url: str
    alt: str = ''

    def __post_init__(self):
        if not self.url:
            raise InvalidNodeException('A media node requires a url.')

    def to_adf(self) -> dict[str, Any]:
        return {
            'type': 'mediaSingle',
            'attrs': {'layout': MEDIA_SINGLE_LAYOUT},
            'content': [
                {
                    'type': 'media',
                    'attrs': {'type': 'external', 'url': self.url, 'alt': self.alt or ''},
                }
            ],
        }


BlockNode = Union[
    Paragraph,
    Heading,
    BulletList,
    OrderedList,
    CodeBlock,
    Blockquote,
    Rule,
    Table,
    MediaSingle,
]


@dataclass(frozen=True)
class Document(AdfNode):
    content: tuple[BlockNode, ...] = field(default_factory=tuple)

    def to_adf(self) -> dict[str, Any]:
        return {
            'version': ADF_DOCUMENT_VERSION,
            'type': 'doc',
            'content': [node.to_adf() for node in self.content],
        }

    def to_json(self, indent: int | None = None, ensure_ascii: bool = False) -> str:
        return json.dumps(self.to_adf(), indent=indent, ensure_ascii=ensure_ascii)
