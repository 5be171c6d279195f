from datetime import datetime, timedelta, timezone

from jose import jwt

from marketplace.core.config import settings


def make_token(user_id: str, **claims) -> str:
    payload = {"userId": user_id, "exp": datetime.now(timezone.utc) + timedelta(minutes=30)}
    payload.update(claims)
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def bearer(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}
