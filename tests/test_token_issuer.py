from datetime import datetime, timedelta

import pytest
import pytz
from jose import jwt

from config import AuthSettings
from core.exceptions import InvalidTokenError
from utils.token_issuer import TokenIssuer


@pytest.fixture
def issuer():
    return TokenIssuer(AuthSettings(secret_key="issuer-secret"))


def test_issue_and_verify_round_trip(issuer):
    token = issuer.issue("lecturer-1")
    assert issuer.verify(token) == "lecturer-1"


def test_default_lifetime_is_two_hours(issuer):
    token = issuer.issue("lecturer-1")
    claims = jwt.get_unverified_claims(token)
    remaining = claims["exp"] - datetime.now(pytz.utc).timestamp()
    assert timedelta(hours=2) - timedelta(minutes=1) < timedelta(seconds=remaining) <= timedelta(hours=2)


def test_token_from_other_secret_is_rejected(issuer):
    other = TokenIssuer(AuthSettings(secret_key="someone-else"))
    with pytest.raises(InvalidTokenError):
        issuer.verify(other.issue("lecturer-1"))


def test_expired_token_is_rejected(issuer):
    token = issuer.issue("lecturer-1", expires_delta=timedelta(seconds=-5))
    with pytest.raises(InvalidTokenError):
        issuer.verify(token)


def test_malformed_token_is_rejected(issuer):
    with pytest.raises(InvalidTokenError):
        issuer.verify("not-a-jwt")


def test_token_without_subject_is_rejected(issuer):
    expire = datetime.now(pytz.utc) + timedelta(minutes=5)
    token = jwt.encode({"exp": expire}, "issuer-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        issuer.verify(token)
