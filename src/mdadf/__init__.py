from mdadf.converter import convert, markdown_to_adf, parse_document, text_to_adf
from mdadf.models import Document

__all__ = ['Document', 'convert', 'markdown_to_adf', 'parse_document', 'text_to_adf']
