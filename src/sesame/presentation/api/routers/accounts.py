"""Accounts router for public account lookup."""

import logging

from fastapi import APIRouter, Query

from sesame.presentation.api.dependencies import SessionServiceDep
from sesame.presentation.api.schemas.accounts import AccountResponse
from sesame_auth import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/lookup",
    summary="Look up an account by username or email",
    responses={
        200: {"description": "Account found"},
        400: {"description": "Neither or both of username and email given"},
        404: {"description": "Account not found"},
    },
)
async def lookup_account(
    session_service: SessionServiceDep,
    username: str | None = Query(default=None, description="Exact username"),
    email: str | None = Query(default=None, description="Email address"),
) -> AccountResponse:
    account = await session_service.lookup(username=username, email=email)
    if account is None:
        logger.debug("Account lookup found no match")
        raise NotFoundError("account not found")
    return AccountResponse.model_validate(account)
