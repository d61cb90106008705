"""Shared dependencies: current user id from the identity provider's bearer token."""
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from app.core.security import user_id_from_token


def get_current_user_id_optional(request: Request) -> str | None:
    """Return the authenticated user id, or None for guests."""
    auth = request.headers.get("authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return user_id_from_token(token.strip())


def require_user_id(
    user_id: Annotated[str | None, Depends(get_current_user_id_optional)],
) -> str:
    if user_id is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
