from unittest.mock import Mock

import pytest
from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from frontiercrawl.api.routers.requests import EnqueueRequest, create_requests_router
from frontiercrawl.db.models import Base
from frontiercrawl.domain.request import Request
from frontiercrawl.exceptions import RowFormatError
from frontiercrawl.repository.requests import RequestsRepository


def _get_endpoint(router, path: str, method: str):
    for route in router.routes:
        if getattr(route, "path", None) != path:
            continue
        methods = getattr(route, "methods", set())
        if method.upper() in methods:
            return route.endpoint
    raise AssertionError(f"No route found for {method} {path}")


@pytest.fixture
def repo():
    engine = create_engine("sqlite:///:memory:", future=True)
    Base.metadata.create_all(engine)
    return RequestsRepository(sessionmaker(bind=engine, future=True))


def test_enqueue_then_get(repo):
    router = create_requests_router(repo)
    enqueue = _get_endpoint(router, "/requests/", "POST")
    get_request = _get_endpoint(router, "/requests/{url_hash}", "GET")

    view = enqueue(EnqueueRequest(url="http://example.com/a#frag", name="A", profile_handle="prof00000001"))
    assert view.url == "http://example.com/a"
    assert view.status_code == 1

    fetched = get_request(url_hash=view.url_hash)
    assert fetched.url == "http://example.com/a"
    assert fetched.name == "A"
    assert fetched.profile_handle == "prof00000001"
    assert fetched.flags == "00000000"


def test_list_requests_in_key_order(repo):
    for i in range(5):
        repo.put_request(Request.for_url(f"http://example.com/{i}"))
    router = create_requests_router(repo)
    list_requests = _get_endpoint(router, "/requests/", "GET")
    views = list_requests(after=None, limit=10)
    hashes = [v.url_hash for v in views]
    assert hashes == sorted(hashes)
    assert len(hashes) == 5


def test_get_unknown_returns_404(repo):
    router = create_requests_router(repo)
    get_request = _get_endpoint(router, "/requests/{url_hash}", "GET")
    with pytest.raises(HTTPException) as exc:
        get_request(url_hash="AAAAAAAAAAAA")
    assert exc.value.status_code == 404


def test_malformed_key_returns_400(repo):
    router = create_requests_router(repo)
    get_request = _get_endpoint(router, "/requests/{url_hash}", "GET")
    with pytest.raises(HTTPException) as exc:
        get_request(url_hash="short")
    assert exc.value.status_code == 400


def test_enqueue_invalid_profile_returns_400(repo):
    router = create_requests_router(repo)
    enqueue = _get_endpoint(router, "/requests/", "POST")
    with pytest.raises(HTTPException) as exc:
        enqueue(EnqueueRequest(url="http://example.com/", profile_handle="bad"))
    assert exc.value.status_code == 400


def test_enqueue_too_long_url_returns_400(repo):
    router = create_requests_router(repo)
    enqueue = _get_endpoint(router, "/requests/", "POST")
    with pytest.raises(HTTPException) as exc:
        enqueue(EnqueueRequest(url="http://example.com/" + "x" * 300))
    assert exc.value.status_code == 400
    assert repo.size() == 0


def test_malformed_stored_row_does_not_leak_details():
    requests_repo = Mock(get_request=Mock(side_effect=RowFormatError("url string is null")))
    router = create_requests_router(requests_repo)
    get_request = _get_endpoint(router, "/requests/{url_hash}", "GET")
    with pytest.raises(HTTPException) as exc:
        get_request(url_hash="AAAAAAAAAAAA")
    assert exc.value.status_code == 500
    assert exc.value.detail == "stored request is malformed"


def test_remove(repo):
    r = Request.for_url("http://example.com/gone")
    repo.put_request(r)
    router = create_requests_router(repo)
    remove = _get_endpoint(router, "/requests/{url_hash}", "DELETE")
    key = r.url_hash.decode("ascii")
    assert remove(url_hash=key) == {"removed": key}
    with pytest.raises(HTTPException) as exc:
        remove(url_hash=key)
    assert exc.value.status_code == 404


@pytest.mark.parametrize("url", ["   ", "#frag"])
def test_enqueue_empty_url_returns_400(repo, url):
    router = create_requests_router(repo)
    enqueue = _get_endpoint(router, "/requests/", "POST")
    list_requests = _get_endpoint(router, "/requests/", "GET")
    with pytest.raises(HTTPException) as exc:
        enqueue(EnqueueRequest(url=url))
    assert exc.value.status_code == 400
    assert repo.size() == 0
    assert list_requests(after=None, limit=10) == []


@pytest.mark.parametrize("limit", [0, -1])
def test_list_requests_rejects_non_positive_limit(repo, limit):
    repo.put_request(Request.for_url("http://example.com/a"))
    router = create_requests_router(repo)
    list_requests = _get_endpoint(router, "/requests/", "GET")
    with pytest.raises(HTTPException) as exc:
        list_requests(after=None, limit=limit)
    assert exc.value.status_code == 400
