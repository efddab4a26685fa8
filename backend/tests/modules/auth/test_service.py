import pytest
from unittest.mock import MagicMock
import jwt
from datetime import datetime, timedelta, timezone

from modules.auth.exceptions import (
    AuthConfigurationError,
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingFieldsError,
    MissingTokenError,
    PasswordHashingError,
    UserNotFoundError,
)
from modules.auth.hashing import PasswordHasher
from modules.auth.models import User
from modules.auth.repository import UserRepository
from modules.auth.service import AuthService
from shared.models import Identity

from tests.conftest import TEST_JWT_SECRET, create_test_token, make_settings
from tests.fakes import FakeSupabase


@pytest.fixture
def users(fake_db):
    return UserRepository(fake_db)


@pytest.fixture
def service(users, test_settings):
    """Auth service over the in-memory store with a fast hasher."""
    return AuthService(users, PasswordHasher(rounds=4), test_settings)


@pytest.fixture
def user() -> User:
    return User(id="user-123", name="Ana", email="ana@x.com")


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_user_and_token(self, service, fake_db):
        user, token = await service.register("Ana", "ana@x.com", "secret123")

        assert user.name == "Ana"
        assert user.email == "ana@x.com"
        assert user.id
        identity = await service.validate_token(token)
        assert identity == Identity(id=user.id, email="ana@x.com")

    @pytest.mark.asyncio
    async def test_register_stores_hash_not_password(self, service, fake_db):
        await service.register("Ana", "ana@x.com", "secret123")

        stored = fake_db.rows["users"][0]
        assert stored["password_hash"] != "secret123"
        assert stored["password_hash"].startswith("$2")

    @pytest.mark.asyncio
    async def test_register_user_has_no_hash(self, service):
        user, _ = await service.register("Ana", "ana@x.com", "secret123")
        assert "password_hash" not in user.model_dump()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name, email, password, missing",
        [
            ("", "ana@x.com", "secret123", ["name"]),
            ("Ana", None, "secret123", ["email"]),
            ("Ana", "ana@x.com", "", ["password"]),
            ("  ", "  ", None, ["name", "email", "password"]),
        ],
    )
    async def test_register_missing_fields(self, service, fake_db, name, email, password, missing):
        with pytest.raises(MissingFieldsError) as exc_info:
            await service.register(name, email, password)

        assert exc_info.value.details["fields"] == missing
        assert fake_db.executed == []

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, service):
        await service.register("Ana", "ana@x.com", "secret123")

        with pytest.raises(EmailAlreadyRegisteredError):
            await service.register("Another Ana", "ana@x.com", "other-password")

    @pytest.mark.asyncio
    async def test_register_race_caught_by_unique_constraint(self, test_settings):
        """If the lookup misses a concurrent insert, the constraint still rejects it."""
        users = MagicMock(spec=UserRepository)
        users.get_by_email.return_value = None
        users.create_user.side_effect = EmailAlreadyRegisteredError("ana@x.com")
        service = AuthService(users, PasswordHasher(rounds=4), test_settings)

        with pytest.raises(EmailAlreadyRegisteredError):
            await service.register("Ana", "ana@x.com", "secret123")

    @pytest.mark.asyncio
    async def test_register_hashing_failure_is_internal(self, users, test_settings):
        hasher = MagicMock(spec=PasswordHasher)
        hasher.hash.side_effect = PasswordHashingError()
        service = AuthService(users, hasher, test_settings)

        with pytest.raises(PasswordHashingError):
            await service.register("Ana", "ana@x.com", "secret123")


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, service):
        registered, first_token = await service.register("Ana", "ana@x.com", "secret123")

        user, token = await service.login("ana@x.com", "secret123")

        assert user == registered
        assert token != first_token

    @pytest.mark.asyncio
    async def test_login_keeps_earlier_tokens_valid(self, service):
        _, first_token = await service.register("Ana", "ana@x.com", "secret123")
        _, second_token = await service.login("ana@x.com", "secret123")

        first = await service.validate_token(first_token)
        second = await service.validate_token(second_token)
        assert first == second

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_are_indistinguishable(self, service):
        await service.register("Ana", "realuser@x.com", "secret123")

        with pytest.raises(InvalidCredentialsError) as unknown:
            await service.login("nouser@x.com", "pw")
        with pytest.raises(InvalidCredentialsError) as wrong:
            await service.login("realuser@x.com", "wrongpw")

        assert type(unknown.value) is type(wrong.value)
        assert unknown.value.message == wrong.value.message == "Invalid credentials"
        assert unknown.value.code == wrong.value.code
        assert unknown.value.details == wrong.value.details

    @pytest.mark.asyncio
    async def test_unknown_email_runs_dummy_verify(self, users, test_settings):
        hasher = MagicMock(spec=PasswordHasher)
        service = AuthService(users, hasher, test_settings)

        with pytest.raises(InvalidCredentialsError):
            await service.login("nouser@x.com", "pw")

        hasher.dummy_verify.assert_called_once()
        hasher.verify.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, service):
        with pytest.raises(MissingFieldsError):
            await service.login("", "secret123")


class TestTokens:
    @pytest.mark.asyncio
    async def test_round_trip(self, service, user):
        """validate_token(issue_token(user)) returns exactly {id, email}."""
        identity = await service.validate_token(service.issue_token(user))
        assert identity.id == user.id
        assert identity.email == user.email

    def test_token_claims(self, service, user):
        issued_at = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        token = service.issue_token(user, issued_at=issued_at)

        claims = jwt.decode(
            token, TEST_JWT_SECRET, algorithms=["HS256"], options={"verify_exp": False}
        )
        assert claims["id"] == "user-123"
        assert claims["email"] == "ana@x.com"
        assert claims["iat"] == int(issued_at.timestamp())
        assert claims["exp"] == int((issued_at + timedelta(days=1)).timestamp())
        assert claims["jti"]

    def test_tokens_issued_together_differ(self, service, user):
        assert service.issue_token(user) != service.issue_token(user)

    @pytest.mark.asyncio
    async def test_expired_token(self, service, user):
        token = service.issue_token(user, issued_at=datetime.now(timezone.utc) - timedelta(days=2))
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_token_just_before_expiry_is_valid(self, service, user):
        issued_at = datetime.now(timezone.utc) - timedelta(hours=23, minutes=59)
        identity = await service.validate_token(service.issue_token(user, issued_at=issued_at))
        assert identity.id == user.id

    @pytest.mark.asyncio
    async def test_expired_is_an_invalid_token(self, service):
        with pytest.raises(InvalidTokenError):
            await service.validate_token(create_test_token(expired=True))

    @pytest.mark.asyncio
    async def test_malformed_token(self, service):
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    async def test_wrong_signature(self, service):
        token = create_test_token(secret="another-secret-key-of-enough-length")
        with pytest.raises(InvalidTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_missing_claims(self, service):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "user-123", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_empty_token(self, service):
        with pytest.raises(MissingTokenError):
            await service.validate_token("")

    @pytest.mark.asyncio
    async def test_none_token(self, service):
        with pytest.raises(MissingTokenError):
            await service.validate_token(None)

    @pytest.mark.asyncio
    async def test_identity_is_a_snapshot(self, service, users):
        """A profile change is not reflected in tokens issued before it."""
        user, token = await service.register("Ana", "ana@x.com", "secret123")
        await service.update_profile(Identity(id=user.id, email=user.email), "Ana", "new@x.com")

        identity = await service.validate_token(token)
        assert identity.email == "ana@x.com"

    @pytest.mark.asyncio
    async def test_missing_secret(self, user):
        service = AuthService(UserRepository(FakeSupabase()), settings=make_settings(jwt_secret=""))

        with pytest.raises(AuthConfigurationError):
            service.issue_token(user)
        with pytest.raises(AuthConfigurationError):
            await service.validate_token(create_test_token())


class TestProfile:
    @pytest.mark.asyncio
    async def test_get_profile(self, service):
        user, _ = await service.register("Ana", "ana@x.com", "secret123")

        profile = await service.get_profile(Identity(id=user.id, email=user.email))

        assert profile == user

    @pytest.mark.asyncio
    async def test_get_profile_missing_user(self, service):
        with pytest.raises(UserNotFoundError):
            await service.get_profile(Identity(id="user-404", email="ghost@x.com"))

    @pytest.mark.asyncio
    async def test_update_profile(self, service):
        user, _ = await service.register("Ana", "ana@x.com", "secret123")
        identity = Identity(id=user.id, email=user.email)

        updated = await service.update_profile(identity, "Ana María", "ana.maria@x.com")

        assert updated.id == user.id
        assert updated.name == "Ana María"
        assert updated.email == "ana.maria@x.com"
        _, token = await service.login("ana.maria@x.com", "secret123")
        assert token

    @pytest.mark.asyncio
    async def test_update_profile_keeping_own_email(self, service):
        user, _ = await service.register("Ana", "ana@x.com", "secret123")

        updated = await service.update_profile(Identity(id=user.id, email=user.email), "Ana M.", "ana@x.com")

        assert updated.name == "Ana M."

    @pytest.mark.asyncio
    async def test_update_profile_email_taken(self, service):
        ana, _ = await service.register("Ana", "ana@x.com", "secret123")
        await service.register("Juan", "juan@x.com", "secret456")

        with pytest.raises(EmailAlreadyRegisteredError):
            await service.update_profile(Identity(id=ana.id, email=ana.email), "Ana", "juan@x.com")

    @pytest.mark.asyncio
    async def test_update_profile_missing_fields(self, service):
        with pytest.raises(MissingFieldsError):
            await service.update_profile(Identity(id="user-123", email="ana@x.com"), "", "ana@x.com")
