import re

from atlas_doc_parser.api import parse_node

from mdadf.models import Document, MediaSingle


def embed_image(document: Document, url: str, alt_text: str | None = None) -> Document:
    """Appends an externally hosted image to a document.

    Args:
        document: the document to extend; it is not modified.
        url: URL of the image.
        alt_text: optional alternative text.

    Returns:
        A new document ending with a mediaSingle node.
    """

    return Document((*document.content, MediaSingle(url, alt_text or '')))


def convert_adf_to_markdown(value: dict) -> str:
    """Convert Atlassian Document Format (ADF) to Markdown.

    Used to preview what a converted document looks like once rendered.

    Args:
        value: ADF document structure

    Returns:
        Markdown string representation
    """

    markdown = parse_node(value).to_markdown(ignore_error=True)

    markdown = re.sub(r'(```\w*\n.*?)\n\n```', r'\1\n```', markdown, flags=re.DOTALL)

    return markdown.lstrip('\n')
