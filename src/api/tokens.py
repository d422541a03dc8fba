"""JWT creation and verification.

Every token carries a `purpose` claim. A token is only accepted where its
purpose is expected, so a long-lived remember-me token cannot be replayed
as a session token.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt

from api.config import JWT_ALGORITHM, JWT_EXPIRATION_DAYS, JWT_SECRET_KEY

logger = logging.getLogger(__name__)

SESSION_PURPOSE = "session"
REMEMBER_ME_PURPOSE = "remember_me"


def create_access_token(user_id: str, days: int = JWT_EXPIRATION_DAYS, purpose: str = SESSION_PURPOSE) -> str:
    """Create JWT access token for user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "exp": now + timedelta(days=days),
        "iat": now,
        "purpose": purpose,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(token: str, purpose: str = SESSION_PURPOSE) -> Optional[str]:
    """Verify JWT token issued for `purpose` and extract user_id."""
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        return None

    if payload.get("purpose") != purpose:
        logger.debug(f"JWT rejected: purpose {payload.get('purpose')!r}, expected {purpose!r}")
        return None
    return payload.get("sub")
