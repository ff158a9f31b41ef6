"""Protocol (interface) definitions for content parsers."""
from typing import BinaryIO, Dict, Optional, Protocol

from frontiercrawl.parser.document import Document


class Parser(Protocol):
    """Turns a byte stream of one of `supported_mime_types` into a `Document`.

    `stop_event` is an optional `threading.Event`; parsers that run long
    check it and raise `ParseCancelledError` once it is set.
    """
    name: str
    supported_mime_types: Dict[str, str]

    def parse(
        self,
        location: str,
        mime_type: str,
        charset: Optional[str],
        source: BinaryIO,
        stop_event=None,
    ) -> Document: ...
