"""Resolve the active user from identity keys written by the login flow.

The login collaborator stores `access_token`, `refresh_token` and
`user_email`. Only `user_email` (or, failing that, the `email`/`sub` claim
of the access token) is read here, to pick the history storage key. The token
is decoded without signature verification: it selects a storage namespace,
it does not grant anything.
"""

import base64
import binascii
import json
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

logger = logging.getLogger(__name__)

IDENTITY_KEYS = ("access_token", "refresh_token", "user_email")


def _token_claim(token: str) -> str | None:
    parts = token.split(".")
    if len(parts) != 3:
        return None

    payload = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(payload))
    except (binascii.Error, ValueError) as e:
        logger.warning(f"Ignoring undecodable access token: {e}")
        return None

    if not isinstance(claims, dict):
        return None
    for name in ("email", "sub"):
        value = claims.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def resolve_user_key(identity: Mapping[str, Any]) -> str | None:
    """Pick the user key for history storage.

    Args:
        identity: Per-browser storage holding the login collaborator's keys.

    Returns:
        The user's email (or token identity claim), None when not logged in.
    """
    email = identity.get("user_email")
    if isinstance(email, str) and email.strip():
        return email.strip()

    token = identity.get("access_token")
    if isinstance(token, str) and token:
        return _token_claim(token)
    return None


def clear_identity(identity: MutableMapping[str, Any]) -> None:
    """Forget the logged-in user (logout)."""
    for key in IDENTITY_KEYS:
        identity.pop(key, None)
