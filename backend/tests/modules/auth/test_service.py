import pytest
from unittest.mock import patch
import jwt
from datetime import datetime, timedelta, timezone

from modules.auth.service import AuthService
from modules.auth.exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)


def _payload(**overrides):
    payload = {
        "sub": "user-123",
        "email": "test@example.com",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        "iat": datetime.now(timezone.utc),
        "aud": "authenticated",
        "role": "authenticated",
    }
    payload.update(overrides)
    return payload


class TestAuthService:
    @pytest.fixture
    def service(self):
        """Create auth service with mocked settings."""
        with patch("modules.auth.service.get_settings") as mock_settings:
            mock_settings.return_value.supabase_jwt_secret = "test-secret"
            mock_settings.return_value.jwt_audience = "authenticated"
            yield AuthService()

    @pytest.fixture
    def valid_token(self):
        """Create a valid JWT token."""
        return jwt.encode(_payload(), "test-secret", algorithm="HS256")

    @pytest.fixture
    def expired_token(self):
        """Create an expired JWT token."""
        payload = _payload(
            exp=datetime.now(timezone.utc) - timedelta(hours=1),
            iat=datetime.now(timezone.utc) - timedelta(hours=2),
        )
        return jwt.encode(payload, "test-secret", algorithm="HS256")

    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service, valid_token):
        """Should validate a valid token and return the identity."""
        user = await service.validate_token(valid_token)
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.email_verified is False
        assert user.last_sign_in is not None

    @pytest.mark.asyncio
    async def test_validate_token_reads_metadata_name(self, service):
        """Display name should fall back to user_metadata.full_name."""
        token = jwt.encode(
            _payload(
                user_metadata={"full_name": "Ada Lovelace"},
                email_confirmed_at="2025-01-01T00:00:00Z",
            ),
            "test-secret",
            algorithm="HS256",
        )
        user = await service.validate_token(token)
        assert user.name == "Ada Lovelace"
        assert user.email_verified is True

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service, expired_token):
        """Should raise ExpiredTokenError for expired token."""
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(expired_token)

    @pytest.mark.asyncio
    async def test_validate_invalid_token(self, service):
        """Should raise InvalidTokenError for malformed token."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    async def test_validate_missing_token(self, service):
        """Should raise MissingTokenError for empty token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token("")

    @pytest.mark.asyncio
    async def test_validate_none_token(self, service):
        """Should raise MissingTokenError for None token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token(None)

    @pytest.mark.asyncio
    async def test_validate_wrong_secret(self, service):
        """Should raise InvalidTokenError for token signed with wrong secret."""
        wrong_secret_token = jwt.encode(_payload(), "wrong-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            await service.validate_token(wrong_secret_token)

    @pytest.mark.asyncio
    async def test_validate_wrong_audience(self, service):
        """Should raise InvalidTokenError for token with wrong audience."""
        wrong_aud_token = jwt.encode(
            _payload(aud="wrong-audience"), "test-secret", algorithm="HS256"
        )
        with pytest.raises(InvalidTokenError):
            await service.validate_token(wrong_aud_token)

    @pytest.mark.asyncio
    async def test_unconfigured_secret_rejects_tokens(self, valid_token):
        """Without a configured secret no token is accepted."""
        with patch("modules.auth.service.get_settings") as mock_settings:
            mock_settings.return_value.supabase_jwt_secret = ""
            service = AuthService()
        with pytest.raises(InvalidTokenError):
            await service.validate_token(valid_token)
