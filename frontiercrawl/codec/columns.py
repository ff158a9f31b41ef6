"""Column layout of a request row.

The layout is bit-exact and shared with every row written so far: column
order, widths and encodings must not change. Reserved columns are kept so
old and new rows line up; they are always written as zero.
"""
from dataclasses import dataclass
from typing import Tuple

from frontiercrawl.domain.flags import FLAGS_WIDTH
from frontiercrawl.domain.identity import COMMON_HASH_LENGTH

# column kinds
BYTES = "bytes"
TEXT = "text"
ASCII = "ascii"
CARDINAL = "cardinal"
BITFIELD = "bitfield"

# over-capacity policies for text columns
REJECT = "reject"
TRUNCATE = "truncate"


@dataclass(frozen=True)
class Column:
    name: str
    width: int
    kind: str
    nullable: bool = True
    overflow: str = REJECT
    reserved: bool = False


class RowDefinition:
    """Ordered fixed-width columns; column 0 is the primary key."""

    def __init__(self, columns: Tuple[Column, ...]):
        self.columns = tuple(columns)
        offsets = []
        offset = 0
        for col in self.columns:
            offsets.append(offset)
            offset += col.width
        self._offsets = tuple(offsets)
        self._index = {col.name: i for i, col in enumerate(self.columns)}
        self.width = offset

    def __len__(self):
        return len(self.columns)

    def column(self, index: int) -> Column:
        return self.columns[index]

    def index_of(self, name: str) -> int:
        return self._index[name]

    def offset(self, index: int) -> int:
        return self._offsets[index]

    def slice(self, index: int) -> slice:
        start = self._offsets[index]
        return slice(start, start + self.columns[index].width)

    @property
    def primary_key_width(self) -> int:
        return self.columns[0].width


REQUEST_ROW = RowDefinition((
    Column("urlhash", COMMON_HASH_LENGTH, BYTES, nullable=False),
    Column("initiator", COMMON_HASH_LENGTH, BYTES),
    Column("urlstring", 256, TEXT, nullable=False, overflow=REJECT),
    Column("refhash", COMMON_HASH_LENGTH, BYTES),
    Column("urlname", 80, TEXT, overflow=TRUNCATE),
    Column("appdate", 8, CARDINAL),
    Column("profile", COMMON_HASH_LENGTH, ASCII),
    Column("depth", 2, CARDINAL),
    Column("parentbr", 3, CARDINAL),
    Column("forkfactor", 4, CARDINAL),
    Column("flags", FLAGS_WIDTH, BITFIELD),
    Column("handle", 4, CARDINAL, reserved=True),
    Column("loaddate", 8, CARDINAL, reserved=True),
    Column("lastmodified", 8, CARDINAL, reserved=True),
    Column("size", 8, CARDINAL),
))
