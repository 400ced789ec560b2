from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Notification:
    title: str
    message: str
    failed: bool = False


@dataclass(frozen=True, slots=True)
class DispatchResult:
    service: str
    ok: bool
    error: Optional[str] = None
