from __future__ import annotations

import json
from typing import Any

from fastapi import HTTPException

from portfolio.core.settings import settings


def payload_kb(value: Any) -> float:
    if isinstance(value, str):
        raw = value.encode("utf-8")
    else:
        # JSON compacto para medir el tamaño real en la base
        raw = json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str).encode("utf-8")
    return len(raw) / 1024.0


def enforce_content_size(value: Any, *, field: str = "content") -> None:
    """
    Rejects blog HTML / section JSON above MAX_CONTENT_KB with HTTP 413.
    A limit of 0 disables the check.
    """
    limit_kb = float(settings.MAX_CONTENT_KB or 0)
    if limit_kb <= 0 or value is None:
        return
    kb = payload_kb(value)
    if kb > limit_kb:
        raise HTTPException(
            status_code=413,
            detail=f"Payload too large: {field} is {kb:.1f}KB, limit is {limit_kb:.0f}KB",
        )
