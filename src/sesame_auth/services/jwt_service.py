"""JWT token service.

Provides signed session token creation and verification.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from sesame_auth.exceptions import ConfigError, ErrorCode, TokenError
from sesame_auth.schemas import SessionToken, TokenClaims
from sesame_auth.time import utc_now

logger = logging.getLogger(__name__)


class JWTService:
    """Service for session token creation and verification.

    Tokens are self-verifying: the service holds no per-token state, so
    any instance configured with the same secret can parse any token
    another instance issued.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.issue(account_id, "alice")
    >>> claims = service.parse(token.jwt)
    >>> print(claims.username)
    """

    DEFAULT_EXPIRE_HOURS = 24
    ALGORITHM = "HS256"
    # Only the HMAC family is accepted on parse; anything else (including
    # "none" and asymmetric algorithms) is rejected.
    ACCEPTED_ALGORITHMS = ("HS256", "HS384", "HS512")
    REQUIRED_CLAIMS = ("sub", "username", "exp")

    def __init__(
        self,
        secret_key: str,
        token_expire_hours: int = DEFAULT_EXPIRE_HOURS,
        leeway_seconds: int = 0,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Shared secret for signing tokens. Must be kept secure.
        token_expire_hours
            Hours until an issued token expires (default 24)
        leeway_seconds
            Clock skew tolerated when checking expiry (default 0)
        clock
            Source of the current time used at issuance

        Raises
        ------
        ConfigError
            If the secret key is missing
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ConfigError(msg)

        self._secret_key = secret_key
        self._expire = timedelta(hours=token_expire_hours)
        self._leeway = timedelta(seconds=leeway_seconds)
        self._clock = clock

    @property
    def token_lifetime(self) -> timedelta:
        return self._expire

    def issue(self, subject_id: UUID, username: str) -> SessionToken:
        """Create a signed token for an account.

        Parameters
        ----------
        subject_id
            The account's unique identifier
        username
            The account's username

        Returns
        -------
        SessionToken holding the encoded JWT and its expiry
        """
        # JWT timestamps have second precision
        now = self._clock().replace(microsecond=0)
        expire = now + self._expire

        payload = {
            "sub": str(subject_id),
            "username": username,
            "iat": now,
            "exp": expire,
        }

        encoded = jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)
        return SessionToken(jwt=encoded, expires_at=expire)

    def parse(self, token: str) -> TokenClaims:
        """Verify and decode a token.

        Parameters
        ----------
        token
            The JWT string to verify

        Returns
        -------
        TokenClaims containing the decoded data

        Raises
        ------
        TokenError
            If the signature or algorithm is wrong, the token has expired,
            or its claims are malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=list(self.ACCEPTED_ALGORITHMS),
                leeway=self._leeway,
                options={"require": list(self.REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenError("expired", code=ErrorCode.TOKEN_EXPIRED) from e
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
            logger.warning("Rejected token: %s", e)
            raise TokenError(
                "invalid signature",
                code=ErrorCode.INVALID_SIGNATURE,
            ) from e
        except jwt.InvalidTokenError as e:
            raise TokenError(
                "malformed claims",
                code=ErrorCode.MALFORMED_CLAIMS,
                details={"reason": str(e)},
            ) from e

        try:
            subject_id = UUID(str(payload["sub"]))
            username = payload["username"]
            if not isinstance(username, str):
                msg = "username claim must be a string"
                raise TypeError(msg)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
            issued_at = (
                datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
                if "iat" in payload
                else None
            )
        except (KeyError, ValueError, TypeError, OverflowError) as e:
            raise TokenError(
                "malformed claims",
                code=ErrorCode.MALFORMED_CLAIMS,
                details={"reason": str(e)},
            ) from e

        return TokenClaims(
            subject_id=subject_id,
            username=username,
            expires_at=expires_at,
            issued_at=issued_at,
        )
