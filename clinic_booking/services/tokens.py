from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from clinic_booking.config import Settings
from clinic_booking.errors import Forbidden

ALGORITHM = "HS256"


def create_access_token(email: str, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    return jwt.encode(
        {"email": email, "exp": expire},
        settings.access_token_secret,
        algorithm=ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings) -> str:
    """Return the email carried by a bearer token or raise Forbidden."""
    try:
        payload = jwt.decode(token, settings.access_token_secret, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise Forbidden() from exc

    email = payload.get("email")
    if not email:
        raise Forbidden()
    return email
