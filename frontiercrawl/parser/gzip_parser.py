import gzip
import logging
import os
import tempfile
from typing import BinaryIO, Optional

from frontiercrawl.exceptions import ParseCancelledError, ParserError
from frontiercrawl.parser.dispatcher import ParserDispatcher
from frontiercrawl.parser.document import Document

logger = logging.getLogger(__name__)

_EXTENSIONS = "gz,tgz"


class GzipParser:
    """Decompresses gzip content and hands it to the dispatcher.

    The uncompressed bytes go to a temporary file whose inner type is
    sniffed again by `ParserDispatcher.parse_source`. The file is removed
    on every exit path. A set `stop_event` raises `ParseCancelledError`,
    which is never wrapped into a `ParserError`.
    """

    name = "GNU Zip Compressed Archive Parser"
    supported_mime_types = {
        "application/x-gzip": _EXTENSIONS,
        "application/gzip": _EXTENSIONS,
        "application/x-gunzip": _EXTENSIONS,
        "application/gzipped": _EXTENSIONS,
        "application/gzip-compressed": _EXTENSIONS,
        "application/x-compressed": _EXTENSIONS,
        "application/x-compress": _EXTENSIONS,
        "gzip/document": _EXTENSIONS,
        "application/octet-stream": _EXTENSIONS,
        "application/x-tar": _EXTENSIONS,
    }

    def __init__(self, dispatcher: ParserDispatcher, temp_dir: Optional[str] = None, chunk_size: int = 1024):
        self._dispatcher = dispatcher
        self._temp_dir = temp_dir
        self._chunk_size = chunk_size

    @staticmethod
    def _check_cancelled(location: str, stop_event) -> None:
        if stop_event is not None and stop_event.is_set():
            raise ParseCancelledError(location)

    def _decompress_to(self, location: str, source: BinaryIO, out: BinaryIO, stop_event) -> int:
        total = 0
        with gzip.GzipFile(fileobj=source, mode="rb") as zipped:
            while True:
                self._check_cancelled(location, stop_event)
                chunk = zipped.read(self._chunk_size)
                if not chunk:
                    break
                out.write(chunk)
                total += len(chunk)
        return total

    def parse(
        self,
        location: str,
        mime_type: str,
        charset: Optional[str],
        source: BinaryIO,
        stop_event=None,
    ) -> Document:
        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                prefix="gunzip", suffix=".tmp", dir=self._temp_dir, delete=False
            ) as out:
                temp_path = out.name
                size = self._decompress_to(location, source, out, stop_event)

            self._check_cancelled(location, stop_event)
            logger.info("Decompressed %d bytes from %s, dispatching inner content", size, location)
            return self._dispatcher.parse_source(location, None, None, temp_path, stop_event=stop_event)
        except (ParseCancelledError, ParserError):
            raise
        except Exception as e:
            logger.exception("Unexpected error while parsing gzip content from %s", location)
            raise ParserError(f"Unexpected error while parsing gzip file. {e}", location) from e
        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.remove(temp_path)
