import gzip
import io
import threading
from unittest.mock import Mock

import pytest

from frontiercrawl.exceptions import ParseCancelledError, ParserError
from frontiercrawl.parser import build_default_dispatcher
from frontiercrawl.parser.dispatcher import ParserDispatcher
from frontiercrawl.parser.gzip_parser import GzipParser
from frontiercrawl.parser.html_parser import HtmlParser

HTML = b"<html><head><title>Packed</title></head><body><p>Inside the archive</p><a href='/next'>next</a></body></html>"
LOCATION = "http://example.com/archive.html.gz"


@pytest.fixture
def temp_dir(tmp_path):
    d = tmp_path / "gunzip"
    d.mkdir()
    return d


def _gzip_parser(dispatcher, temp_dir, chunk_size=1024):
    parser = GzipParser(dispatcher, temp_dir=str(temp_dir), chunk_size=chunk_size)
    dispatcher.register(parser)
    return parser


def test_result_matches_direct_parse_and_temp_file_removed(temp_dir):
    dispatcher = ParserDispatcher()
    dispatcher.register(HtmlParser())
    parser = _gzip_parser(dispatcher, temp_dir)

    doc = parser.parse(LOCATION, "application/gzip", None, io.BytesIO(gzip.compress(HTML)))

    assert doc == dispatcher.parse(LOCATION, "text/html", None, HTML)
    assert doc.title == "Packed"
    assert list(temp_dir.iterdir()) == []


def test_dispatcher_routes_gzip_types(temp_dir):
    dispatcher = build_default_dispatcher(temp_dir=str(temp_dir))
    doc = dispatcher.parse(LOCATION, "application/x-gzip", None, gzip.compress(b"just text"))
    assert doc.mime_type == "text/plain"
    assert doc.text == "just text"
    assert list(temp_dir.iterdir()) == []


def test_nested_gzip(temp_dir):
    dispatcher = build_default_dispatcher(temp_dir=str(temp_dir))
    doc = dispatcher.parse(LOCATION, "application/gzip", None, gzip.compress(gzip.compress(HTML)))
    assert doc.title == "Packed"
    assert list(temp_dir.iterdir()) == []


def test_inner_parse_failure_is_wrapped_and_temp_file_removed(temp_dir):
    class BrokenParser:
        name = "broken"
        supported_mime_types = {"text/html": "html"}

        def parse(self, location, mime_type, charset, source, stop_event=None):
            raise RuntimeError("inner parser exploded")

    dispatcher = ParserDispatcher()
    dispatcher.register(BrokenParser())
    parser = _gzip_parser(dispatcher, temp_dir)

    with pytest.raises(ParserError) as exc:
        parser.parse(LOCATION, "application/gzip", None, io.BytesIO(gzip.compress(HTML)))
    assert exc.value.location == LOCATION
    assert "inner parser exploded" in str(exc.value)
    assert isinstance(exc.value.__cause__, RuntimeError)
    assert list(temp_dir.iterdir()) == []


def test_inner_parser_error_propagates_unchanged(temp_dir):
    dispatcher = ParserDispatcher()
    parser = _gzip_parser(dispatcher, temp_dir)
    # no parser for the decompressed text/plain content
    with pytest.raises(ParserError) as exc:
        parser.parse(LOCATION, "application/gzip", None, io.BytesIO(gzip.compress(b"plain")))
    assert "No parser available" in str(exc.value)
    assert list(temp_dir.iterdir()) == []


def test_corrupt_stream_raises_parser_error(temp_dir):
    dispatcher = build_default_dispatcher(temp_dir=str(temp_dir))
    parser = GzipParser(dispatcher, temp_dir=str(temp_dir))
    with pytest.raises(ParserError) as exc:
        parser.parse(LOCATION, "application/gzip", None, io.BytesIO(b"\x1f\x8bnot really gzip"))
    assert exc.value.location == LOCATION
    assert list(temp_dir.iterdir()) == []


def test_cancelled_before_start_is_not_wrapped(temp_dir):
    dispatcher = build_default_dispatcher(temp_dir=str(temp_dir))
    parser = GzipParser(dispatcher, temp_dir=str(temp_dir))
    stop = threading.Event()
    stop.set()
    with pytest.raises(ParseCancelledError):
        parser.parse(LOCATION, "application/gzip", None, io.BytesIO(gzip.compress(HTML)), stop_event=stop)
    assert list(temp_dir.iterdir()) == []


def test_cancelled_mid_stream(temp_dir):
    dispatcher = build_default_dispatcher(temp_dir=str(temp_dir))
    parser = GzipParser(dispatcher, temp_dir=str(temp_dir), chunk_size=16)
    stop = Mock()
    stop.is_set.side_effect = [False, False, True] + [True] * 100
    inner = Mock()
    dispatcher.parse_source = inner

    with pytest.raises(ParseCancelledError) as exc:
        parser.parse(LOCATION, "application/gzip", None, io.BytesIO(gzip.compress(HTML * 4)), stop_event=stop)
    assert exc.value.location == LOCATION
    assert not inner.called
    assert list(temp_dir.iterdir()) == []


def test_supported_mime_types():
    assert "application/gzip" in GzipParser.supported_mime_types
    assert "application/x-tar" in GzipParser.supported_mime_types
    assert GzipParser.supported_mime_types["gzip/document"] == "gz,tgz"
