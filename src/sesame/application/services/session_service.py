"""Session service for registration, authentication and token refresh."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from sesame_auth import (
    AccountData,
    AuthError,
    CredentialValidator,
    Credentials,
    ErrorCode,
    JWTService,
    PasswordHashingService,
    RefreshPolicy,
    RegisterInput,
    SessionToken,
    TokenError,
    ValidationError,
)
from sesame_auth.services import normalize_email

if TYPE_CHECKING:
    from sesame_auth import AccountRepository

logger = logging.getLogger(__name__)


class SessionService:
    """
    Application service for session tokens.

    Composes the auth building blocks (validation, password hashing,
    JWT tokens) with the account store to provide:
    - Registration
    - Authentication with email and password
    - Token refresh
    - Account lookup

    Every operation is a single linear attempt; nothing is retried here.
    Errors propagate to the caller unchanged in kind.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        validator: CredentialValidator | None = None,
        refresh_policy: RefreshPolicy = RefreshPolicy.STATELESS,
        uniform_auth_errors: bool = False,
    ):
        self._account_repo = account_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._validator = validator or CredentialValidator(password_service)
        self._refresh_policy = refresh_policy
        self._uniform_auth_errors = uniform_auth_errors

    async def register(self, registration: RegisterInput) -> SessionToken:
        # bcrypt is deliberately slow; keep it off the event loop
        prepared = await asyncio.to_thread(
            self._validator.prepare_for_storage,
            registration,
        )
        account = await self._account_repo.create(prepared)

        token = self._jwt_service.issue(account.id, account.username)

        logger.info("Account registered: %s (%s)", account.username, account.id)
        return token

    async def authenticate(self, credentials: Credentials) -> SessionToken:
        email = normalize_email(credentials.email)
        record = await self._account_repo.find_full_record_by_email(email)
        if record is None:
            logger.warning("Authentication failed: unknown email")
            raise self._auth_error("user not found", ErrorCode.USER_NOT_FOUND)

        matches = await asyncio.to_thread(
            self._password_service.verify,
            credentials.password,
            record.password_hash,
        )
        if not matches:
            logger.warning("Authentication failed for account: %s", record.id)
            raise self._auth_error(
                "passwords don't match",
                ErrorCode.PASSWORD_MISMATCH,
            )

        token = self._jwt_service.issue(record.id, record.username)

        logger.info("Account authenticated: %s", record.username)
        return token

    async def refresh(self, old_token: str) -> SessionToken:
        claims = self._jwt_service.parse(old_token)

        if self._refresh_policy is RefreshPolicy.VERIFY_SUBJECT:
            account = await self._account_repo.find_by_id(claims.subject_id)
            if account is None or account.username != claims.username:
                logger.warning(
                    "Refresh rejected for unknown subject: %s",
                    claims.subject_id,
                )
                raise TokenError("unknown subject", code=ErrorCode.UNKNOWN_SUBJECT)

        token = self._jwt_service.issue(claims.subject_id, claims.username)

        logger.debug("Token refreshed for account: %s", claims.subject_id)
        return token

    async def lookup(
        self,
        username: str | None = None,
        email: str | None = None,
    ) -> AccountData | None:
        if (username is None) == (email is None):
            msg = "exactly one of username or email is required"
            raise ValidationError(msg)

        if username is not None:
            return await self._account_repo.find_by_username(username.strip())
        return await self._account_repo.find_by_email(normalize_email(email))

    def _auth_error(self, message: str, code: ErrorCode) -> AuthError:
        if self._uniform_auth_errors:
            return AuthError()
        return AuthError(message, code=code)
