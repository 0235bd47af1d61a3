"""
Identity Service

Resolves who is playing. Session tokens are HS256 JWTs carrying a
``user_id`` claim; a game only needs to know the id of its requester.
"""

import datetime
from typing import Optional

import jwt

from ..utils.game_logger import game_logger


def issue_session_token(user_id: str, secret: str, expiration_days: int = 7) -> str:
    """
    Create a signed session token for a user.

    Args:
        user_id: Identifier stored in the ``user_id`` claim
        secret: HS256 signing secret
        expiration_days: Token lifetime

    Returns:
        Encoded JWT string
    """
    now = datetime.datetime.now(datetime.timezone.utc)
    payload = {
        "user_id": user_id,
        "iat": now,
        "exp": now + datetime.timedelta(days=expiration_days),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def resolve_user_id(token: Optional[str], secret: Optional[str]) -> Optional[str]:
    """
    Decode a session token and return its user id.

    Returns None for a missing, expired or invalid token; anonymous play is
    allowed, so a bad token never blocks a game.
    """
    if not token or not secret:
        return None

    try:
        payload = jwt.decode(token, secret, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        game_logger.logger.info("Session token expired; continuing anonymously")
        return None
    except jwt.InvalidTokenError as e:
        game_logger.logger.warning(f"Rejected session token: {e}")
        return None

    user_id = payload.get("user_id")
    return str(user_id) if user_id else None


class StaticIdentity:
    """Identity bound to a single requester for the lifetime of a game."""

    def __init__(self, user_id: Optional[str] = None):
        self.user_id = user_id

    def get_current_user_id(self) -> Optional[str]:
        return self.user_id
