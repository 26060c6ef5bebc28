from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Optional

from fastapi import Header, Request
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from app import config
from app.errors import AuthError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class CurrentUser:
    id: int
    email: str


def hash_password(password: str):
    """Hash a password after validating bcrypt's 72-byte limit.

    Raises ValueError if the UTF-8 encoding of the password exceeds 72 bytes.
    """
    if isinstance(password, str):
        b = password.encode("utf-8")
        if len(b) > 72:
            # make the failure explicit and consistent
            raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain, hashed):
    """Verify a plaintext password against a hash.

    If verification raises a ValueError (for example plain >72 bytes), return False
    to allow the caller to respond with an authentication failure instead of an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_token(user_id: int, email: str) -> str:
    # read expiry at call-time so tests (and runtime overrides) that modify
    # app.config.ACCESS_TOKEN_EXPIRE_MINUTES take effect immediately
    expire = datetime.now(UTC) + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    data = {
        "sub": str(user_id),
        "email": email,
        "exp": int(expire.timestamp()),  # JWT spec uses Unix timestamp
    }
    return jwt.encode(data, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_token(token: str) -> CurrentUser:
    """Validate signature and expiry and return the identity the token binds.

    Raises AuthError (403) for anything that is not a valid, unexpired token.
    """
    try:
        # jwt.decode validates exp automatically
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except ExpiredSignatureError:
        raise AuthError("Token has expired", status_code=403)
    except JWTError:
        raise AuthError("Invalid token", status_code=403)

    sub = payload.get("sub")
    email = payload.get("email")
    if sub is None or not email:
        raise AuthError("Invalid token: missing user", status_code=403)
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise AuthError("Invalid token: missing user", status_code=403)
    return CurrentUser(id=user_id, email=email)


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def get_current_user(request: Request, authorization: Optional[str] = Header(None)) -> CurrentUser:
    """Route dependency guarding every task endpoint.

    Missing token is 401, a bad or expired one is 403. The identity is also
    left on ``request.state.user`` for anything further down the request.
    """
    tok = _extract_token(authorization)
    if not tok:
        raise AuthError("Access token required", status_code=401)
    user = decode_token(tok)
    request.state.user = user
    return user
