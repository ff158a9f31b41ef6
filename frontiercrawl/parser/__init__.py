from typing import Optional

from .dispatcher import ParserDispatcher, detect_mime
from .document import Document
from .gzip_parser import GzipParser
from .html_parser import HtmlParser
from .text_parser import TextParser


def build_default_dispatcher(temp_dir: Optional[str] = None, chunk_size: int = 1024) -> ParserDispatcher:
    """Dispatcher with the HTML, plain text and gzip parsers registered."""
    dispatcher = ParserDispatcher()
    dispatcher.register(HtmlParser())
    dispatcher.register(TextParser())
    dispatcher.register(GzipParser(dispatcher, temp_dir=temp_dir, chunk_size=chunk_size))
    return dispatcher


__all__ = [
    "Document",
    "GzipParser",
    "HtmlParser",
    "ParserDispatcher",
    "TextParser",
    "build_default_dispatcher",
    "detect_mime",
]
