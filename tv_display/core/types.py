"""Shared type aliases for readability and contract enforcement."""
from __future__ import annotations

from typing import Any, Mapping, NewType, TypeAlias

RecordId = NewType("RecordId", int)

JSONLike: TypeAlias = Mapping[str, Any]
