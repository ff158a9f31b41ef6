from datetime import datetime
from typing import Optional, Union

from frontiercrawl.domain.flags import Bitfield, FLAGS_WIDTH
from frontiercrawl.domain.identity import COMMON_HASH_LENGTH, url_hash as derive_url_hash
from frontiercrawl.domain.status import RequestStatus, StatusTracker, WorkflowStatus
from frontiercrawl.exceptions import ContractViolation
from frontiercrawl.utils.datetime_utils import from_epoch_millis, to_epoch_millis
from frontiercrawl.utils.url_utils import canonicalize_url


def _location(url: Optional[str]) -> str:
    if url is None:
        raise ContractViolation("request url must not be None")
    canonical = canonicalize_url(url)
    if not canonical:
        raise ContractViolation(f"request url {url!r} is empty once its fragment is removed")
    return canonical


def _non_negative(name: str, value) -> int:
    value = int(value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


class Request:
    """A URL queued in the crawl frontier.

    The identity key (`url_hash`) is fixed when the request is created or
    decoded and never follows later changes of `url`, so queues and
    indexes keyed on it keep tracking the same entry across a redirect.
    Mutation (`redirect`, `set_status`) is not synchronized; whoever owns
    the request serializes it.

    Use `Request.create` for a freshly discovered URL. The plain
    constructor takes an already frozen `url_hash` and is what the row
    codec uses when rehydrating a stored request.
    """

    def __init__(
        self,
        url_hash: bytes,
        url: str,
        initiator: Optional[bytes] = None,
        referrer_hash: Optional[bytes] = None,
        name: Optional[str] = None,
        appearance_date: int = 0,
        profile_handle: Optional[str] = None,
        depth: int = 0,
        parent_anchor_count: int = 0,
        fork_factor: int = 0,
        flags: Optional[Bitfield] = None,
        size: int = 0,
        status: Optional[StatusTracker] = None,
    ):
        if url is None:
            raise ContractViolation("request url must not be None")
        if url_hash is None or len(url_hash) != COMMON_HASH_LENGTH:
            raise ContractViolation(f"url hash must have length {COMMON_HASH_LENGTH}")
        self._url_hash = bytes(url_hash)
        self._url = canonicalize_url(url)
        self._initiator = bytes(initiator) if initiator else None
        self._referrer_hash = bytes(referrer_hash) if referrer_hash else None
        self._name = name if name is not None else ""
        self._appearance_date = _non_negative("appearance_date", appearance_date)
        self._profile_handle = profile_handle
        self._depth = _non_negative("depth", depth)
        self._parent_anchor_count = _non_negative("parent_anchor_count", parent_anchor_count)
        self._fork_factor = _non_negative("fork_factor", fork_factor)
        self._flags = flags if flags is not None else Bitfield(FLAGS_WIDTH)
        self._size = _non_negative("size", size)
        self._status = status if status is not None else StatusTracker()

    @classmethod
    def create(
        cls,
        initiator: Optional[bytes],
        url: str,
        referrer_hash: Optional[bytes] = None,
        name: Optional[str] = None,
        appearance_date: Union[datetime, int, None] = None,
        profile_handle: Optional[str] = None,
        depth: int = 0,
        parent_anchor_count: int = 0,
        fork_factor: int = 0,
        size: int = 0,
        flags: Optional[Bitfield] = None,
    ) -> "Request":
        """Build a request for a newly discovered URL.

        `profile_handle` may only be omitted by reduced constructions; such
        a request is not fetch-ready until a handle is attached.
        """
        canonical = _location(url)
        if profile_handle is not None:
            # stored text columns read back stripped
            profile_handle = profile_handle.strip()
            if len(profile_handle) != COMMON_HASH_LENGTH:
                raise ContractViolation(
                    f"profile handle {profile_handle!r} must have length {COMMON_HASH_LENGTH}"
                )
        return cls(
            url_hash=derive_url_hash(canonical),
            url=canonical,
            initiator=initiator,
            referrer_hash=referrer_hash,
            name=name.strip() if name is not None else None,
            appearance_date=to_epoch_millis(appearance_date),
            profile_handle=profile_handle,
            depth=depth,
            parent_anchor_count=parent_anchor_count,
            fork_factor=fork_factor,
            flags=flags,
            size=size,
            status=StatusTracker("loaded(args)", WorkflowStatus.INITIATED),
        )

    @classmethod
    def for_url(cls, url: str, referrer_hash: Optional[bytes] = None) -> "Request":
        """Reduced construction without initiator or crawl profile."""
        return cls.create(None, url, referrer_hash)

    @property
    def url_hash(self) -> bytes:
        return self._url_hash

    @property
    def url(self) -> str:
        return self._url

    def redirect(self, new_url: str) -> None:
        """Point the request at `new_url`; identity and every other field stay as they are."""
        self._url = _location(new_url)

    @property
    def initiator(self) -> Optional[bytes]:
        return self._initiator

    @property
    def is_proxy(self) -> bool:
        # no initiator: the request came from the local proxy, not a crawl
        return self._initiator is None

    @property
    def referrer_hash(self) -> Optional[bytes]:
        return self._referrer_hash

    @property
    def name(self) -> str:
        return self._name

    @property
    def appearance_date(self) -> int:
        return self._appearance_date

    @property
    def appearance_datetime(self) -> Optional[datetime]:
        return from_epoch_millis(self._appearance_date)

    @property
    def profile_handle(self) -> str:
        if self._profile_handle is None or len(self._profile_handle) != COMMON_HASH_LENGTH:
            raise ContractViolation(
                f"profile handle {self._profile_handle!r} must have length {COMMON_HASH_LENGTH}"
            )
        return self._profile_handle

    @property
    def stored_profile_handle(self) -> Optional[str]:
        """The handle as stored, without the length check."""
        return self._profile_handle

    @property
    def is_fetch_ready(self) -> bool:
        return self._profile_handle is not None and len(self._profile_handle) == COMMON_HASH_LENGTH

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def parent_anchor_count(self) -> int:
        return self._parent_anchor_count

    @property
    def fork_factor(self) -> int:
        return self._fork_factor

    @property
    def flags(self) -> Bitfield:
        return self._flags

    @property
    def size(self) -> int:
        return self._size

    @property
    def status(self) -> RequestStatus:
        return self._status.get()

    def set_status(self, message: str, code: int) -> None:
        self._status.set(message, code)

    def __eq__(self, other):
        if not isinstance(other, Request):
            return NotImplemented
        return self._url_hash == other._url_hash

    def __hash__(self):
        return hash(self._url_hash)

    def __repr__(self):
        return f"<Request hash={self._url_hash.decode('ascii', 'replace')} url={self._url} depth={self._depth}>"
