"""Tests for canonical hashing helpers."""

from reverie_task.crypto import canonical_json, content_digest, sha256


class TestHashing:
    def test_sha256_str_and_bytes_agree(self):
        assert sha256("abc") == sha256(b"abc")
        assert len(sha256("abc")) == 64

    def test_canonical_json_sorted_compact(self):
        assert canonical_json({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'

    def test_digest_ignores_insertion_order(self):
        assert content_digest({"x": 1, "y": 2}) == content_digest({"y": 2, "x": 1})

    def test_digest_sensitive_to_values(self):
        assert content_digest({"x": 1}) != content_digest({"x": 2})
