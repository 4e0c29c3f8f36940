"""Hashing utilities for round artifacts."""

from __future__ import annotations

import hashlib
import json
from typing import Any


def sha256(data: str | bytes) -> str:
    """Compute SHA-256 hash of data."""
    if isinstance(data, str):
        data = data.encode()
    return hashlib.sha256(data).hexdigest()


def canonical_json(obj: Any) -> str:
    """Serialize ``obj`` to a canonical JSON string.

    Keys are sorted and separators are compact, so two nodes holding the
    same mapping produce byte-identical output regardless of insertion order.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def content_digest(obj: Any) -> str:
    """SHA-256 of the canonical JSON encoding of ``obj``."""
    return sha256(canonical_json(obj))
