"""Auth service (JWT, password hashing)."""
from datetime import datetime, timedelta
import bcrypt
import jwt
from innkeep.config import get_settings

settings = get_settings()


def _pwd_bytes(password: str, max_len: int = 72) -> bytes:
    return password.encode("utf-8")[:max_len]


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_pwd_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_pwd_bytes(password), bcrypt.gensalt()).decode("utf-8")


def create_access_token(user_id: int, username: str, role: str) -> str:
    expire = datetime.utcnow() + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    # PyJWT expects "sub" to be a string
    payload = {"sub": str(user_id), "username": username, "role": getattr(role, "value", role), "exp": expire}
    raw = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return raw if isinstance(raw, str) else raw.decode("utf-8")


def decode_token(token: str) -> dict | None:
    payload, _ = decode_token_with_error(token)
    return payload


def decode_token_with_error(token: str) -> tuple[dict | None, str | None]:
    """Decode JWT; returns (payload, error_message)."""
    if not token or not isinstance(token, str):
        return None, "empty token"
    try:
        payload = jwt.decode(token.strip(), settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        return payload, None
    except jwt.PyJWTError as e:
        return None, str(e)
