from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from .errors import InvalidArgument, PlanboardError, StoreFailure


def now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


def new_uuid() -> str:
    return str(uuid.uuid4())


def clean_text(value: object, field: str, max_length: int) -> str:
    """Trim ``value`` and check it holds 1..``max_length`` characters."""
    if not isinstance(value, str):
        raise InvalidArgument(f"{field} must be a string", {"field": field})
    text = value.strip()
    if not text:
        raise InvalidArgument(f"{field} must not be empty", {"field": field})
    if len(text) > max_length:
        raise InvalidArgument(
            f"{field} must be at most {max_length} characters long",
            {"field": field, "maxLength": max_length},
        )
    return text


def preview(text: str, limit: int = 50) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


@contextmanager
def logged_failure(log: logging.Logger, action: str) -> Iterator[None]:
    """Log a failed operation and let the exception continue upwards."""
    try:
        yield
    except StoreFailure:
        log.exception("Failed to %s", action)
        raise
    except PlanboardError as exc:
        log.warning("Failed to %s: %s", action, exc.message)
        raise
    except Exception:
        log.exception("Failed to %s", action)
        raise
