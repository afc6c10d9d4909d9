"""Bearer token helpers.

Sessions are issued by an external authentication service; ConfigHub only
needs to mint (for tooling and tests) and verify HS256 JWTs whose ``sub``
claim is the numeric user id.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from confighub.core.errors import AuthenticationRequired
from confighub.core.settings import settings


def create_access_token(user_id: int, extra_claims: dict[str, str] | None = None) -> str:
    """Create a JWT access token for ``user_id``."""
    to_encode: dict[str, object] = {"sub": str(user_id)}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token``.

    Raises:
        AuthenticationRequired: If the token is invalid, expired or has no subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise AuthenticationRequired("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise AuthenticationRequired("Could not validate credentials")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise AuthenticationRequired("Could not validate credentials") from err
