"""Test data builders shared across unit and integration tests."""

from sesame_auth import (
    CredentialValidator,
    JWTService,
    PasswordHashingService,
    RegisterInput,
)

TEST_SECRET = "test-jwt-secret-for-testing-only"
TEST_PASSWORD = "correct horse battery staple"
# Minimum bcrypt cost keeps hashing fast in tests
TEST_ROUNDS = 4


def make_registration(
    username: str = "alice",
    email: str = "a@x.io",
    password: str = TEST_PASSWORD,
    confirm_password: str | None = None,
    first_name: str = "Alice",
    last_name: str = "Liddell",
) -> RegisterInput:
    return RegisterInput(
        first_name=first_name,
        last_name=last_name,
        email=email,
        username=username,
        password=password,
        confirm_password=password if confirm_password is None else confirm_password,
    )


def make_password_service() -> PasswordHashingService:
    return PasswordHashingService(rounds=TEST_ROUNDS)


def make_jwt_service(**kwargs) -> JWTService:
    return JWTService(secret_key=TEST_SECRET, **kwargs)


def make_validator() -> CredentialValidator:
    return CredentialValidator(make_password_service())


def sqlite_url(tmp_path, name: str = "sesame.db") -> str:
    return f"sqlite+aiosqlite:///{tmp_path / name}"
