import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from frontiercrawl.domain.identity import COMMON_HASH_LENGTH
from frontiercrawl.domain.request import Request
from frontiercrawl.exceptions import ContractViolation, RowFormatError

logger = logging.getLogger(__name__)


class EnqueueRequest(BaseModel):
    url: str
    initiator: Optional[str] = None
    referrer_hash: Optional[str] = None
    name: Optional[str] = None
    profile_handle: Optional[str] = None
    depth: int = 0
    parent_anchor_count: int = 0
    fork_factor: int = 0
    size: int = 0


class RequestView(BaseModel):
    url_hash: str
    url: str
    initiator: Optional[str] = None
    referrer_hash: Optional[str] = None
    name: str
    appearance_date: int
    profile_handle: Optional[str] = None
    depth: int
    parent_anchor_count: int
    fork_factor: int
    flags: str
    size: int
    status_message: str
    status_code: int


def _key_text(key: Optional[bytes]) -> Optional[str]:
    return key.decode("ascii", errors="replace") if key is not None else None


def _key_bytes(text: Optional[str]) -> Optional[bytes]:
    if text is None:
        return None
    try:
        key = text.encode("ascii")
    except UnicodeEncodeError:
        raise HTTPException(status_code=400, detail="invalid key")
    if len(key) != COMMON_HASH_LENGTH:
        raise HTTPException(status_code=400, detail="invalid key")
    return key


def to_view(request: Request) -> RequestView:
    status = request.status
    return RequestView(
        url_hash=_key_text(request.url_hash),
        url=request.url,
        initiator=_key_text(request.initiator),
        referrer_hash=_key_text(request.referrer_hash),
        name=request.name,
        appearance_date=request.appearance_date,
        profile_handle=request.stored_profile_handle,
        depth=request.depth,
        parent_anchor_count=request.parent_anchor_count,
        fork_factor=request.fork_factor,
        flags=request.flags.to_bytes().hex(),
        size=request.size,
        status_message=status.message,
        status_code=status.code,
    )


def create_requests_router(requests_repo):
    router = APIRouter(prefix="/requests", tags=["Requests"])

    @router.get("/", response_model=List[RequestView])
    def list_requests(after: Optional[str] = None, limit: int = 100):
        if limit < 1:
            raise HTTPException(status_code=400, detail="limit must be at least 1")
        try:
            requests = requests_repo.fetch_requests(after=_key_bytes(after), limit=limit)
        except RowFormatError:
            logger.exception("Stored request row could not be decoded")
            raise HTTPException(status_code=500, detail="stored request is malformed")
        return [to_view(r) for r in requests]

    @router.get("/{url_hash}", response_model=RequestView)
    def get_request(url_hash: str):
        try:
            request = requests_repo.get_request(_key_bytes(url_hash))
        except RowFormatError:
            logger.exception("Stored request row %s could not be decoded", url_hash)
            raise HTTPException(status_code=500, detail="stored request is malformed")
        if request is None:
            raise HTTPException(status_code=404, detail="request not found")
        return to_view(request)

    @router.post("/", response_model=RequestView, status_code=201)
    def enqueue(body: EnqueueRequest):
        try:
            request = Request.create(
                initiator=_key_bytes(body.initiator),
                url=body.url,
                referrer_hash=_key_bytes(body.referrer_hash),
                name=body.name,
                profile_handle=body.profile_handle,
                depth=body.depth,
                parent_anchor_count=body.parent_anchor_count,
                fork_factor=body.fork_factor,
                size=body.size,
            )
            requests_repo.put_request(request)
        except ContractViolation as e:
            raise HTTPException(status_code=400, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return to_view(request)

    @router.delete("/{url_hash}")
    def remove_request(url_hash: str):
        if not requests_repo.remove(_key_bytes(url_hash)):
            raise HTTPException(status_code=404, detail="request not found")
        return {"removed": url_hash}

    return router
