from __future__ import annotations

import logging

from fastapi import Header, HTTPException

logger = logging.getLogger(__name__)

BEARER = "Bearer "


def get_current_user(authorization: str = Header(...)) -> str:
    """Resolve the caller's user id.

    Tokens are verified by the gateway in front of this service, so the
    bearer value already is the user id. Every core operation receives it
    as an explicit argument.
    """
    scheme, _, token = authorization.partition(" ")
    user_id = token.strip()
    if f"{scheme} " != BEARER or not user_id:
        logger.debug("Rejected authorization header with scheme %r", scheme)
        raise HTTPException(status_code=401, detail="invalid_token")
    return user_id
