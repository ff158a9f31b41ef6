import codecs
import io
import logging
from typing import BinaryIO, Dict, Optional, Tuple

from frontiercrawl.exceptions import ParserError
from frontiercrawl.parser.base import Parser
from frontiercrawl.parser.document import Document

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
_SNIFF_BYTES = 1024


def split_content_type(content_type: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split a Content-Type header value into (mime type, charset)."""
    if not content_type:
        return None, None
    parts = [p.strip() for p in content_type.split(";")]
    mime = parts[0].lower() or None
    charset = None
    for param in parts[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset" and value:
            charset = value.strip().strip('"').lower()
    return mime, charset


def detect_mime(data: bytes) -> str:
    """Guess the MIME type of `data` from its leading bytes."""
    if data.startswith(GZIP_MAGIC):
        return "application/gzip"
    head = data[:_SNIFF_BYTES].lstrip().lower()
    if head.startswith(b"<!doctype html") or b"<html" in head:
        return "text/html"
    try:
        # the sniffed prefix may end inside a multi-byte character
        codecs.getincrementaldecoder("utf-8")().decode(data, final=False)
    except UnicodeDecodeError:
        return "application/octet-stream"
    return "text/plain"


class ParserDispatcher:
    """Routes content to the parser registered for its MIME type."""

    def __init__(self):
        self._parsers: Dict[str, Parser] = {}

    def register(self, parser: Parser) -> None:
        for mime in parser.supported_mime_types:
            self._parsers[mime.lower()] = parser

    def supports(self, mime_type: str) -> bool:
        mime, _ = split_content_type(mime_type)
        return mime in self._parsers

    def parser_for(self, mime_type: str) -> Parser:
        parser = self._parsers.get(mime_type)
        if parser is None:
            raise ParserError(f"No parser available for mime type {mime_type}")
        return parser

    def parse_stream(
        self,
        location: str,
        mime_type: str,
        charset: Optional[str],
        source: BinaryIO,
        stop_event=None,
    ) -> Document:
        mime, header_charset = split_content_type(mime_type)
        parser = self._parsers.get(mime)
        if parser is None:
            raise ParserError(f"No parser available for mime type {mime}", location)
        logger.debug("Parsing %s as %s with %s", location, mime, parser.name)
        return parser.parse(location, mime, charset or header_charset, source, stop_event=stop_event)

    def parse(
        self,
        location: str,
        mime_type: Optional[str],
        charset: Optional[str],
        data: bytes,
        stop_event=None,
    ) -> Document:
        """Parse in-memory `data`; the type is sniffed when `mime_type` is None."""
        if mime_type is None:
            mime_type = detect_mime(data)
        return self.parse_stream(location, mime_type, charset, io.BytesIO(data), stop_event=stop_event)

    def parse_source(
        self,
        location: str,
        mime_type: Optional[str],
        charset: Optional[str],
        path: str,
        stop_event=None,
    ) -> Document:
        """Parse the file at `path`; the type is sniffed from its content when `mime_type` is None."""
        with open(path, "rb") as f:
            if mime_type is None:
                mime_type = detect_mime(f.read(_SNIFF_BYTES))
                f.seek(0)
            return self.parse_stream(location, mime_type, charset, f, stop_event=stop_event)
