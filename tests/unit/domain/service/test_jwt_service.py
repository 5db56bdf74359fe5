"""Unit tests for JWTService."""

from uuid import uuid4

import jwt
import pytest

from discuss.config import AuthSettings
from discuss.domain.service import JWTService
from discuss.domain.value import Role
from discuss.util.jwt import JWTError


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(auth_settings=AuthSettings(jwt_secret="test-secret"))


class TestTokens:
    def test_round_trip_keeps_role(self, jwt_service):
        user_id = str(uuid4())

        token = jwt_service.create_token(user_id, Role.ADMIN)
        payload = jwt_service.verify_token(token)

        assert payload.user_id == user_id
        assert payload.role == Role.ADMIN

    def test_role_defaults_to_user(self, jwt_service):
        token = jwt.encode(
            {"user_id": "u-1", "exp": 9999999999}, "test-secret", algorithm="HS256"
        )

        assert jwt_service.verify_token(token).role == Role.USER

    def test_foreign_signature_rejected(self, jwt_service):
        other = JWTService(auth_settings=AuthSettings(jwt_secret="other"))
        token = other.create_token(str(uuid4()))

        with pytest.raises(JWTError):
            jwt_service.verify_token(token)

    def test_unknown_role_rejected(self, jwt_service):
        token = jwt.encode(
            {"user_id": "u-1", "role": "superuser", "exp": 9999999999},
            "test-secret",
            algorithm="HS256",
        )

        with pytest.raises(JWTError):
            jwt_service.verify_token(token)

    def test_optional_auth_returns_none(self, jwt_service):
        assert jwt_service.get_payload_from_token(None) is None
        assert jwt_service.get_payload_from_token("garbage") is None
