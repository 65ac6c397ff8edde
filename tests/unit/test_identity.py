"""Unit tests for resolving the logged-in user."""

import base64
import json

from chatdesk.identity import IDENTITY_KEYS, clear_identity, resolve_user_key


def make_token(claims: object) -> str:
    """Build an unsigned JWT-shaped token carrying the given claims."""

    def encode(value: object) -> str:
        raw = json.dumps(value).encode()
        return base64.urlsafe_b64encode(raw).decode().rstrip("=")

    return f"{encode({'alg': 'none'})}.{encode(claims)}.signature"


class TestResolveUserKey:
    """Tests for picking the history storage key."""

    def test_email_wins(self) -> None:
        identity = {"user_email": " a@x.com ", "access_token": make_token({"email": "b@x.com"})}

        assert resolve_user_key(identity) == "a@x.com"

    def test_token_email_claim(self) -> None:
        assert resolve_user_key({"access_token": make_token({"email": "b@x.com"})}) == "b@x.com"

    def test_token_subject_claim(self) -> None:
        assert resolve_user_key({"access_token": make_token({"sub": "user-42"})}) == "user-42"

    def test_anonymous(self) -> None:
        assert resolve_user_key({}) is None
        assert resolve_user_key({"user_email": "   "}) is None

    def test_malformed_token_is_anonymous(self) -> None:
        assert resolve_user_key({"access_token": "not-a-token"}) is None
        assert resolve_user_key({"access_token": "a.!!!.c"}) is None

    def test_token_without_identity_claim(self) -> None:
        assert resolve_user_key({"access_token": make_token({"exp": 1})}) is None
        assert resolve_user_key({"access_token": make_token(["email"])}) is None


class TestClearIdentity:
    """Tests for logout."""

    def test_removes_identity_keys_only(self) -> None:
        identity = {key: "value" for key in IDENTITY_KEYS}
        identity["theme"] = "dark"

        clear_identity(identity)

        assert identity == {"theme": "dark"}

    def test_missing_keys_are_fine(self) -> None:
        identity: dict[str, str] = {}

        clear_identity(identity)

        assert identity == {}
