from datetime import timedelta

import jwt
import pytest

from application.token_service import create_access_token, decode_access_token
from domain.errors import AuthenticationError


def test_token_carries_id_and_role(settings):
    user = decode_access_token(create_access_token("42", "client", settings), settings)
    assert (user.user_id, user.role) == ("42", "client")


def test_unknown_role_cannot_be_issued(settings):
    with pytest.raises(ValueError):
        create_access_token("42", "superuser", settings)


def test_expired_token(settings):
    token = create_access_token("42", "admin", settings, expires_delta=timedelta(minutes=-1))
    with pytest.raises(AuthenticationError, match="expired"):
        decode_access_token(token, settings)


def test_token_signed_with_another_secret(settings):
    forged = jwt.encode({"id": "42", "role": "admin"}, "some-other-secret-of-sufficient-length", algorithm="HS256")
    with pytest.raises(AuthenticationError):
        decode_access_token(forged, settings)


def test_token_without_role_claim(settings):
    token = jwt.encode({"id": "42"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(AuthenticationError):
        decode_access_token(token, settings)
