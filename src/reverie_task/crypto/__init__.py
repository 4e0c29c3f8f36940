"""Hashing helpers for canonical round artifacts."""

from reverie_task.crypto.hashing import canonical_json, content_digest, sha256

__all__ = [
    "canonical_json",
    "content_digest",
    "sha256",
]
