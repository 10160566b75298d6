import uuid
from typing import Any

from jose import JWTError, jwt

from hopeclub.config import settings
from hopeclub.policy import Identity, Role


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decodes a JWT access token issued by the auth provider."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def decode_identity(token: str | None) -> Identity:
    """Maps a token to the caller's identity; anything unusable is anonymous."""
    if not token:
        return Identity.anonymous()
    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        return Identity.anonymous()
    try:
        actor_id = uuid.UUID(str(payload["sub"]))
    except ValueError:
        return Identity.anonymous()
    return Identity(actor_id=actor_id, role=Role.parse(payload.get(settings.ROLE_CLAIM)))
