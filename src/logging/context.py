# src/logging/context.py — v2
"""Contextual logging support: attach tool name and request id to records."""

from __future__ import annotations

import contextvars
import uuid
from dataclasses import dataclass
from typing import Any

_tool: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "tool", default=None
)
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


@dataclass
class LogContext:
    """Snapshot of the current logging context."""

    tool: str | None = None
    request_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(tool=_tool.get(), request_id=_request_id.get())


def set_tool_context(tool: str, request_id: str | None = None) -> str:
    """Set context for one tool invocation. Returns the request id used."""
    rid = request_id or uuid.uuid4().hex[:12]
    _tool.set(tool)
    _request_id.set(rid)
    return rid


def clear_context() -> None:
    _tool.set(None)
    _request_id.set(None)
