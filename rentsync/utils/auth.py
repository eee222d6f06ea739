"""
Utilita di autenticazione / Authentication utilities.
Token JWT che trasportano la sessione (ruolo, id, nome).
JWT tokens carrying the session (role, id, name).
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from rentsync.config import settings

ROLE_AGENCY = "agency"
ROLE_AGENT = "agent"


def create_session_token(role: str, user_id: str | None, name: str) -> str:
    """Creare un token di sessione JWT / Create a JWT session token."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": user_id or role, "role": role, "name": name, "type": "session", "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict | None:
    """Decodificare un token JWT / Decode a JWT token. Returns None if invalid."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
