"""Authentication schemas for request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sesame_auth import Credentials, RegisterInput, SessionToken


class RegisterRequest(BaseModel):
    """Request schema for account registration.

    Fields are accepted as plain strings; the credential validator owns
    the content rules so that errors carry the service's messages.
    """

    first_name: str
    last_name: str
    email: str
    username: str
    password: str
    confirm_password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "Alice",
                "last_name": "Liddell",
                "email": "alice@example.com",
                "username": "alice",
                "password": "correct horse battery staple",
                "confirm_password": "correct horse battery staple",
            },
        },
    )

    def to_input(self) -> RegisterInput:
        return RegisterInput(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            username=self.username,
            password=self.password,
            confirm_password=self.confirm_password,
        )


class AuthenticateRequest(BaseModel):
    """Request schema for authentication with email and password."""

    email: str
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "correct horse battery staple",
            },
        },
    )

    def to_credentials(self) -> Credentials:
        return Credentials(email=self.email, password=self.password)


class RefreshRequest(BaseModel):
    """Request schema for token refresh."""

    old_token: str = Field(..., description="A previously issued session token")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "old_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            },
        },
    )


class TokenResponse(BaseModel):
    """Response schema for an issued session token."""

    jwt: str
    token_type: str = Field(default="bearer")
    expires_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "jwt": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJzdWIiOiI1NTBlODQwMC1lMjliLTQxZDQtYTcxNi00NDY2NTU0NDAwMDAiLCJleHAiOjE3MzMzOTg2MDB9.xxx",
                "token_type": "bearer",
                "expires_at": "2025-01-02T12:00:00Z",
            },
        },
    )

    @classmethod
    def from_token(cls, token: SessionToken) -> "TokenResponse":
        return cls(
            jwt=token.jwt,
            token_type=token.token_type,
            expires_at=token.expires_at,
        )
