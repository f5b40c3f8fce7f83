"""
Error kinds raised by the planboard core.

- NotFound: a referenced board, list or card does not exist
- Forbidden: the resolved board is owned by someone else
- InvalidArgument: bad text, index out of range, stale parent ids,
  cross-board moves
- StoreFailure: the record store itself failed

All kinds propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PlanboardError(Exception):
    """Base exception for all planboard errors."""

    code = "planboard_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFound(PlanboardError):
    code = "not_found"


class Forbidden(PlanboardError):
    code = "forbidden"


class InvalidArgument(PlanboardError):
    code = "invalid_argument"


class StoreFailure(PlanboardError):
    code = "store_failure"
