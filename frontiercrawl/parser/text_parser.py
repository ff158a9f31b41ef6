from typing import BinaryIO, Optional

from frontiercrawl.exceptions import ParserError
from frontiercrawl.parser.document import Document


class TextParser:
    name = "Plain Text Parser"
    supported_mime_types = {"text/plain": "txt,text"}

    def parse(self, location: str, mime_type: str, charset: Optional[str], source: BinaryIO, stop_event=None) -> Document:
        charset = charset or "utf-8"
        try:
            text = source.read().decode(charset, errors="replace")
        except LookupError as e:
            raise ParserError(f"Unknown charset {charset}", location) from e
        return Document(
            location=location,
            mime_type=mime_type,
            charset=charset,
            title=None,
            text=text.strip(),
        )
