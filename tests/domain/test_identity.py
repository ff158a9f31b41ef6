from frontiercrawl.domain.identity import COMMON_HASH_LENGTH, is_valid_hash, url_hash


def test_hash_has_common_length():
    key = url_hash("http://example.com/page")
    assert len(key) == COMMON_HASH_LENGTH
    assert is_valid_hash(key)


def test_hash_is_deterministic():
    assert url_hash("http://example.com/a") == url_hash("http://example.com/a")


def test_different_urls_get_different_hashes():
    assert url_hash("http://example.com/a") != url_hash("http://example.com/b")


def test_fragment_does_not_change_hash():
    assert url_hash("http://example.com/a#top") == url_hash("http://example.com/a")


def test_hash_is_ascii():
    url_hash("http://example.com/ünïcode").decode("ascii")


def test_is_valid_hash_rejects_other_lengths():
    assert not is_valid_hash(b"short")
    assert not is_valid_hash(None)
    assert not is_valid_hash("a" * COMMON_HASH_LENGTH)
