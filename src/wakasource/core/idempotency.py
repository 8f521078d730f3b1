"""Record identity and content fingerprints.

Identifiers are deterministic so that re-running a window re-emits the same
records; the store uses the content digest to detect changed content.

content_digest = sha256(normalized_json(payload))
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any

__all__ = [
    "create_content_digest",
    "normalize_identifier_part",
    "normalize_payload_for_hashing",
]

_NON_ALPHANUMERIC_RUN = re.compile(r"[^a-z0-9]+", re.IGNORECASE | re.ASCII)


def normalize_payload_for_hashing(payload: Any) -> str:
    """Normalize payload for consistent hashing.

    Parameters
    ----------
    payload
        JSON-compatible value (dicts, lists, scalars)

    Returns
    -------
    str
        Normalized JSON string for hashing
    """
    # Sort keys for deterministic serialization
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def create_content_digest(payload: Any) -> str:
    """Fingerprint a record's data.

    Identical logical payloads produce identical digests regardless of key
    order.

    Example
    -------
    >>> create_content_digest({"b": 1, "a": 2}) == create_content_digest({"a": 2, "b": 1})
    True
    """
    normalized = normalize_payload_for_hashing(payload)
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def normalize_identifier_part(name: str) -> str:
    """Strip every run of non-alphanumeric characters and upper-case.

    Lossy: ``"C++"`` and ``"C"`` both become ``"C"``.

    Example
    -------
    >>> normalize_identifier_part("Visual Studio Code")
    'VISUALSTUDIOCODE'
    """
    return _NON_ALPHANUMERIC_RUN.sub("", name).upper()
