from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from food_portal.core.config import settings
from food_portal.core.errors import InvalidTokenError


def hash_password(password: str, rounds: int | None = None) -> str:
	salt = bcrypt.gensalt(rounds or settings.bcrypt_rounds)
	return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
	try:
		return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
	except ValueError:
		# malformed hash or password longer than bcrypt accepts
		return False


def issue_token(user_id: str, is_admin: bool, ttl_hours: int | None = None) -> str:
	now = datetime.now(timezone.utc)
	payload = {
		"sub": user_id,
		"is_admin": is_admin,
		"iat": now,
		"exp": now + timedelta(hours=ttl_hours if ttl_hours is not None else settings.jwt_ttl_hours),
	}
	return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
	try:
		payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
	except jwt.PyJWTError as exc:
		raise InvalidTokenError() from exc
	if not payload.get("sub"):
		raise InvalidTokenError()
	return payload
