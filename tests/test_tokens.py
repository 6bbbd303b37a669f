"""TokenService — issue/verify round trips and every way verification fails."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from inkpost.auth.jwt import InvalidToken, TokenService

SECRET = "unit-test-secret-0123456789-abcdefghij"


@pytest.fixture()
def service():
    return TokenService(SECRET)


def test_issue_then_verify_returns_user_id(service):
    token = service.issue("65a1f0c2e4b0a1b2c3d4e5f6")
    assert service.verify(token) == "65a1f0c2e4b0a1b2c3d4e5f6"


def test_token_expires_after_seven_days(service):
    token = service.issue("abc")
    claims = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600


def test_expired_token_fails(service):
    issued = datetime.now(timezone.utc) - timedelta(days=7, minutes=1)
    token = service.issue("abc", issued_at=issued)
    with pytest.raises(InvalidToken, match="expired"):
        service.verify(token)


def test_token_just_inside_window_still_verifies(service):
    issued = datetime.now(timezone.utc) - timedelta(days=6, hours=23)
    assert service.verify(service.issue("abc", issued_at=issued)) == "abc"


def test_wrong_secret_fails(service):
    other = TokenService("a-completely-different-secret-9876543210")
    with pytest.raises(InvalidToken):
        service.verify(other.issue("abc"))


def test_tampered_token_fails(service):
    header, payload, signature = service.issue("abc").split(".")
    forged = jwt.encode(
        {"sub": "someone-else"}, "attacker-chosen-secret-0123456789", algorithm="HS256"
    ).split(".")[1]
    with pytest.raises(InvalidToken):
        service.verify(".".join([header, forged, signature]))


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "Bearer"])
def test_malformed_token_fails(service, token):
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_token_without_expiry_is_rejected(service):
    token = jwt.encode({"sub": "abc", "iat": 0}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_from_settings_uses_configured_expiry():
    from inkpost.config import Settings

    svc = TokenService.from_settings(Settings(jwt_secret=SECRET, token_expire_days=1))
    claims = jwt.decode(svc.issue("abc"), SECRET, algorithms=["HS256"])
    assert claims["exp"] - claims["iat"] == 24 * 3600
