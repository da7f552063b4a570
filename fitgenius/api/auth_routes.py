"""Login and registration routes plus the bearer-token dependency."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fitgenius.api.store import Account, password_problems, store
from fitgenius.schemas.auth import Credentials, TokenResponse
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

bearer = HTTPBearer(auto_error=False)


async def current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Account:
    """Resolve the bearer token to an account or answer 401."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    account = store.resolve_token(credentials.credentials)
    if account is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return account


@router.post("/register", response_model=TokenResponse)
async def register(payload: Credentials):
    problems = password_problems(payload.password)
    if problems:
        raise HTTPException(status_code=400, detail=f"Password needs {' and '.join(problems)}")
    try:
        account = store.create_account(payload.username, payload.password)
    except KeyError:
        raise HTTPException(status_code=409, detail=f"User '{payload.username}' already exists")
    logger.info(f"Registered user {payload.username}")
    return TokenResponse(token=store.issue_token(account))


@router.post("/login", response_model=TokenResponse)
async def login(payload: Credentials):
    account = store.authenticate(payload.username, payload.password)
    if account is None:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return TokenResponse(token=store.issue_token(account))
