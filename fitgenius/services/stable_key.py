"""Deterministic cache keys for request payloads.

Keys are ``"{prefix}_{hash}"`` where the hash is a 32-bit polynomial rolling
hash (``h = h * 31 + unit``) over the UTF-16 code units of a canonical JSON
rendering of the payload, wrapped to a signed 32-bit integer. Two payloads
that are equal by value produce the same key in any process. Distinct
payloads may collide in the 32-bit space; callers pick discriminating fields
(counts, last-modified timestamps) rather than dumping whole records.
"""

import json
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

_MASK = 0xFFFFFFFF


def _default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    raise TypeError(f"Object of type {type(value).__name__} is not key-serializable")


def canonical_json(payload: Any) -> str:
    """Render ``payload`` with sorted keys and no insignificant whitespace."""
    return json.dumps(
        payload,
        default=_default,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def rolling_hash(text: str) -> int:
    """``h = h*31 + code_unit`` over UTF-16 code units, as a signed 32-bit int."""
    encoded = text.encode("utf-16-be")
    h = 0
    for i in range(0, len(encoded), 2):
        unit = (encoded[i] << 8) | encoded[i + 1]
        h = (h * 31 + unit) & _MASK
    return h - (1 << 32) if h & 0x80000000 else h


def stable_key(prefix: str, payload: Any) -> str:
    """Fingerprint ``payload`` under ``prefix``."""
    return f"{prefix}_{rolling_hash(canonical_json(payload))}"
