"""Session identity.

The id only stamps orders with ``customerId`` and is shown as a debug
label; it carries no authorization. With a bootstrap token the id comes
from the token's ``uid`` (or ``sub``) claim, otherwise an anonymous id
is generated once and persisted in the data directory.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from jose import JWTError, jwt

from construapp.infrastructure.config import Settings

logger = logging.getLogger(__name__)

_IDENTITY_FILE = "identity.json"


@dataclass(frozen=True)
class Identity:
    user_id: str
    anonymous: bool


def sign_in(settings: Settings) -> Identity:
    if settings.initial_auth_token:
        identity = _sign_in_with_token(settings.initial_auth_token, settings.auth_secret)
        if identity is not None:
            return identity
    return _sign_in_anonymously(settings.data_dir)


def _sign_in_with_token(token: str, secret: str | None) -> Identity | None:
    if not secret:
        logger.warning("Bootstrap token given without auth_secret; signing in anonymously")
        return None
    try:
        claims = jwt.decode(token, secret, algorithms=["HS256"])
    except JWTError as exc:
        logger.warning("Bootstrap token rejected (%s); signing in anonymously", exc)
        return None

    user_id = claims.get("uid") or claims.get("sub")
    if not user_id:
        logger.warning("Bootstrap token has no uid claim; signing in anonymously")
        return None
    return Identity(user_id=str(user_id), anonymous=False)


def _sign_in_anonymously(data_dir: Path) -> Identity:
    path = data_dir / _IDENTITY_FILE
    if path.exists():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return Identity(user_id=str(raw["user_id"]), anonymous=True)
        except (ValueError, KeyError, TypeError):
            logger.warning("Ignoring unreadable identity file %s", path)

    identity = Identity(user_id=uuid.uuid4().hex, anonymous=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"user_id": identity.user_id}) + "\n", encoding="utf-8")
    return identity
