import json

import pytest

from mdadf.exceptions import InvalidNodeException
from mdadf.models import (
    Blockquote,
    BulletList,
    CodeBlock,
    Document,
    Heading,
    ListItem,
    Mark,
    MediaSingle,
    OrderedList,
    Paragraph,
    Rule,
    Table,
    TableRow,
    Text,
)


class TestDocument:
    def test_empty_document(self):
        assert Document().to_adf() == {'version': 1, 'type': 'doc', 'content': []}

    def test_document_with_content(self):
        document = Document((Rule(),))

        assert document.to_adf() == {'version': 1, 'type': 'doc', 'content': [{'type': 'rule'}]}

    def test_to_json(self):
        document = Document((Paragraph((Text('héllo'),)),))

        assert json.loads(document.to_json()) == document.to_adf()
        assert 'héllo' in document.to_json()
        assert '\\u00e9' in document.to_json(ensure_ascii=True)
        assert '\n' in document.to_json(indent=2)


class TestMarks:
    def test_simple_marks(self):
        assert [m.to_adf() for m in (Mark.strong(), Mark.em(), Mark.code(), Mark.strike())] == [
            {'type': 'strong'},
            {'type': 'em'},
            {'type': 'code'},
            {'type': 'strike'},
        ]

    def test_link_mark(self):
        assert Mark.link('https://example.com').to_adf() == {
            'type': 'link',
            'attrs': {'href': 'https://example.com'},
        }

    def test_link_mark_requires_href(self):
        with pytest.raises(InvalidNodeException):
            Mark.link('')


class TestTextNode:
    def test_without_marks_has_no_marks_field(self):
        assert Text('plain').to_adf() == {'type': 'text', 'text': 'plain'}

    def test_with_marks(self):
        assert Text('b', (Mark.strong(),)).to_adf() == {
            'type': 'text',
            'text': 'b',
            'marks': [{'type': 'strong'}],
        }


class TestBlockNodes:
    def test_paragraph_requires_content(self):
        with pytest.raises(InvalidNodeException):
            Paragraph(())

    @pytest.mark.parametrize('level', [0, 7, -1])
    def test_heading_level_out_of_range(self, level):
        with pytest.raises(InvalidNodeException) as exc_info:
            Heading(level, (Text('x'),))

        assert exc_info.value.extra == {'level': level}

    def test_heading(self):
        assert Heading(6, (Text('x'),)).to_adf() == {
            'type': 'heading',
            'attrs': {'level': 6},
            'content': [{'type': 'text', 'text': 'x'}],
        }

    def test_lists_require_items(self):
        with pytest.raises(InvalidNodeException):
            BulletList(())
        with pytest.raises(InvalidNodeException):
            OrderedList(())

    def test_list_item_with_nested_list(self):
        nested = OrderedList((ListItem(Paragraph((Text('b'),))),))
        item = ListItem(Paragraph((Text('a'),)), nested)

        assert [child['type'] for child in item.to_adf()['content']] == ['paragraph', 'orderedList']

    def test_list_item_nested_child_must_be_a_list(self):
        with pytest.raises(InvalidNodeException):
            ListItem(Paragraph((Text('a'),)), Rule())

    def test_code_block(self):
        assert CodeBlock('x = 1').to_adf() == {
            'type': 'codeBlock',
            'attrs': {'language': 'text'},
            'content': [{'type': 'text', 'text': 'x = 1'}],
        }
        assert CodeBlock('x = 1', 'python').to_adf()['attrs'] == {'language': 'python'}

    def test_blockquote(self):
        assert Blockquote(Paragraph((Text('q'),))).to_adf() == {
            'type': 'blockquote',
            'content': [{'type': 'paragraph', 'content': [{'type': 'text', 'text': 'q'}]}],
        }

    def test_tables_require_rows_and_cells(self):
        with pytest.raises(InvalidNodeException):
            Table(())
        with pytest.raises(InvalidNodeException):
            TableRow(())

    def test_media_single(self):
        assert MediaSingle('https://example.com/image.png', 'alt text').to_adf() == {
            'type': 'mediaSingle',
            'attrs': {'layout': 'center'},
            'content': [
                {
                    'type': 'media',
                    'attrs': {'type': 'external', 'url': 'https://example.com/image.png', 'alt': 'alt text'},
                }
            ],
        }

    def test_nodes_are_immutable(self):
        paragraph = Paragraph((Text('a'),))

        with pytest.raises(AttributeError):
            paragraph.content = ()  # type: ignore[misc]
