from typing import List, Optional

from frontiercrawl.codec.columns import (
    ASCII,
    BITFIELD,
    BYTES,
    CARDINAL,
    REQUEST_ROW,
    TEXT,
    TRUNCATE,
    Column,
    RowDefinition,
)
from frontiercrawl.domain.flags import Bitfield
from frontiercrawl.domain.request import Request
from frontiercrawl.domain.status import StatusTracker, WorkflowStatus
from frontiercrawl.exceptions import RowFormatError


def _is_null(cell: bytes) -> bool:
    return not any(cell)


def _pad(data: bytes, col: Column) -> bytes:
    return data + b"\x00" * (col.width - len(data))


def _truncate_utf8(data: bytes, width: int) -> bytes:
    # drop a multi-byte character cut in half by the column boundary
    return data[:width].decode("utf-8", errors="ignore").encode("utf-8")


class RequestRowCodec:
    """Maps a `Request` to a fixed-width row and back.

    Stateless and free of I/O, so one instance can be shared between
    threads. Absent optional values are written as all-zero cells and an
    all-zero cell reads back as absent.
    """

    def __init__(self, rowdef: RowDefinition = REQUEST_ROW):
        self.rowdef = rowdef

    @property
    def width(self) -> int:
        return self.rowdef.width

    def _encode_cell(self, col: Column, value) -> bytes:
        cell = self._encode_value(col, value)
        if not col.nullable and _is_null(cell):
            raise ValueError(f"{col.name} must not be null")
        return cell

    def _encode_value(self, col: Column, value) -> bytes:
        if col.reserved or value is None:
            return b"\x00" * col.width
        if col.kind == CARDINAL:
            try:
                return int(value).to_bytes(col.width, "big", signed=False)
            except OverflowError:
                raise ValueError(f"{col.name}={value} does not fit an unsigned {col.width}-byte column")
        if col.kind == BITFIELD:
            data = value.to_bytes()
            if len(data) != col.width:
                raise ValueError(f"{col.name} must have {col.width} bytes, got {len(data)}")
            return data
        if col.kind == BYTES:
            data = bytes(value)
            if len(data) != col.width:
                raise ValueError(f"{col.name} must have {col.width} bytes, got {len(data)}")
            return data
        if col.kind == ASCII:
            data = value.encode("ascii")
        elif col.kind == TEXT:
            data = value.encode("utf-8")
        else:
            raise ValueError(f"unknown column kind {col.kind!r} for {col.name}")
        if len(data) > col.width:
            if col.overflow != TRUNCATE:
                raise ValueError(f"{col.name} is {len(data)} bytes, column holds {col.width}")
            data = _truncate_utf8(data, col.width)
        return _pad(data, col)

    def encode(self, request: Request) -> bytes:
        """Return the row for `request`; raises ValueError for values outside their columns."""
        values = (
            request.url_hash,
            request.initiator,
            request.url,
            request.referrer_hash,
            request.name,
            request.appearance_date,
            request.stored_profile_handle,
            request.depth,
            request.parent_anchor_count,
            request.fork_factor,
            request.flags,
            None,
            None,
            None,
            request.size,
        )
        if len(values) != len(self.rowdef):
            raise ValueError("request values do not match the row definition")
        cells: List[bytes] = [
            self._encode_cell(col, value) for col, value in zip(self.rowdef.columns, values)
        ]
        return b"".join(cells)

    def _cell(self, row: bytes, index: int) -> bytes:
        return row[self.rowdef.slice(index)]

    def _text(self, row: bytes, index: int, encoding: str) -> Optional[str]:
        cell = self._cell(row, index)
        if _is_null(cell):
            return None
        try:
            return cell.rstrip(b"\x00").decode(encoding)
        except UnicodeDecodeError as e:
            raise RowFormatError(f"column {self.rowdef.column(index).name} is not valid {encoding}") from e

    def _bytes(self, row: bytes, index: int) -> Optional[bytes]:
        cell = self._cell(row, index)
        return None if _is_null(cell) else cell

    def _cardinal(self, row: bytes, index: int) -> int:
        return int.from_bytes(self._cell(row, index), "big", signed=False)

    def primary_key(self, row: bytes) -> bytes:
        return row[self.rowdef.slice(0)]

    def decode(self, row: Optional[bytes]) -> Request:
        """Rebuild a request from `row`.

        The stored primary key becomes the request identity as is; it is not
        re-derived from the URL string, which may hold a redirect target.
        """
        if row is None:
            raise RowFormatError("row is missing")
        row = bytes(row)
        if len(row) != self.rowdef.width:
            raise RowFormatError(f"row has {len(row)} bytes, expected {self.rowdef.width}")
        url_hash = self._bytes(row, 0)
        if url_hash is None:
            raise RowFormatError("primary key is null")
        url = self._text(row, 2, "utf-8")
        if url is None:
            raise RowFormatError("url string is null")

        name = self._text(row, 4, "utf-8")
        profile = self._text(row, 6, "ascii")
        return Request(
            url_hash=url_hash,
            url=url,
            initiator=self._bytes(row, 1),
            referrer_hash=self._bytes(row, 3),
            name=name.strip() if name is not None else "",
            appearance_date=self._cardinal(row, 5),
            profile_handle=profile.strip() if profile is not None else None,
            depth=self._cardinal(row, 7),
            parent_anchor_count=self._cardinal(row, 8),
            fork_factor=self._cardinal(row, 9),
            flags=Bitfield(self.rowdef.column(10).width, self._cell(row, 10)),
            size=self._cardinal(row, 14),
            status=StatusTracker("loaded(row)", WorkflowStatus.NONE),
        )


_DEFAULT_CODEC = RequestRowCodec()


def encode_request(request: Request) -> bytes:
    return _DEFAULT_CODEC.encode(request)


def decode_request(row: Optional[bytes]) -> Request:
    return _DEFAULT_CODEC.decode(row)
