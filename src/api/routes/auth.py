"""Authentication routes.

This module handles HTTP endpoints for sign-up, login and the current
caller, and provides the dependency that binds the caller to the request's
database session.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ADMIN_TOKEN,
    JWT_ALGORITHM,
    JWT_SECRET_KEY,
)
from core.dependencies import AccountManagerDep, ProfileManagerDep, RoleManagerDep
from core.exceptions import ProfileNotFoundError
from core.policies import bind_caller, elevated
from models.account import AccountModel
from models.user_role import AppRole
from schemas.profile import Profile
from schemas.user import (
    Account,
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    SignupRequest,
)
from utils.account_manager import AccountAlreadyExistsError, InvalidCredentialsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

# HTTP Bearer token security
security = HTTPBearer()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        data: Data to encode in the token.
        expires_delta: Optional expiration time delta.

    Returns:
        Encoded JWT token string.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(pytz.utc) + expires_delta
    else:
        expire = datetime.now(pytz.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(credentials: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    """Verify JWT token from Authorization header.

    Args:
        credentials: HTTP Bearer token credentials.

    Returns:
        Decoded token payload.

    Raises:
        HTTPException: If token is invalid or expired.
    """
    try:
        payload = jwt.decode(
            credentials.credentials, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )
    if payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )
    return payload


def get_current_account(
    token_payload: dict = Depends(verify_token),
    account_manager: AccountManagerDep = None,
) -> AccountModel:
    """Resolve the caller and bind it to the request's database session.

    Args:
        token_payload: Decoded JWT token payload.
        account_manager: Injected AccountManager instance.

    Returns:
        The caller's AccountModel.

    Raises:
        HTTPException: If the account no longer exists.
    """
    account = account_manager.get_account(token_payload["sub"])
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found",
        )
    bind_caller(account_manager.db, account.id)
    return account


@router.post("/signup", summary="Create an account")
def signup(
    req: SignupRequest,
    account_manager: AccountManagerDep = None,
) -> dict:
    """Create an account; its profile is provisioned by the database.

    Passing ``admin_token`` equal to ADMIN_TOKEN also grants the admin role,
    in the same transaction as the account.
    Teacher and student roles are granted by an admin afterwards.

    Args:
        req: Sign-up request.
        account_manager: Injected AccountManager instance.

    Returns:
        Dictionary with success message and account_id.

    Raises:
        HTTPException: If sign-up fails.
    """
    grant_admin = req.admin_token is not None
    if grant_admin:
        if not ADMIN_TOKEN:
            logger.error("ADMIN_TOKEN is not set in environment variables")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Admin sign-up is not configured. ADMIN_TOKEN not set.",
            )
        if req.admin_token != ADMIN_TOKEN:
            logger.warning("Admin sign-up rejected for %s: token mismatch", req.email)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid admin token",
            )

    roles = [AppRole.ADMIN] if grant_admin else []
    try:
        # The admin token above is what authorizes writing the role row
        with elevated(account_manager.db):
            account = account_manager.create_account(
                email=req.email,
                password=req.password,
                metadata={
                    "username": req.username,
                    "first_name": req.first_name,
                    "last_name": req.last_name,
                },
                roles=roles,
            )
    except AccountAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return {
        "success": True,
        "message": "Account created successfully",
        "account_id": account.id,
    }


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login(
    req: LoginRequest,
    account_manager: AccountManagerDep = None,
) -> LoginResponse:
    """Login with email and password.

    Args:
        req: Login request with email and password.
        account_manager: Injected AccountManager instance.

    Returns:
        LoginResponse with account information and JWT token.

    Raises:
        HTTPException: If login fails.
    """
    try:
        account = account_manager.authenticate(req.email, req.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    token = create_access_token(
        data={"sub": account.id},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return LoginResponse(account=Account.model_validate(account), token=token)


@router.post("/logout", summary="Log out")
def logout() -> dict:
    """Logout endpoint.

    Tokens are stateless; the client discards its token. This endpoint exists
    for API consistency.
    """
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse, summary="Current caller")
def me(
    current_account: AccountModel = Depends(get_current_account),
    profile_manager: ProfileManagerDep = None,
    role_manager: RoleManagerDep = None,
) -> CurrentUserResponse:
    """Account, profile and role names of the caller."""
    try:
        profile = Profile.model_validate(profile_manager.get_profile(current_account.id))
    except ProfileNotFoundError:
        profile = None
    return CurrentUserResponse(
        account=Account.model_validate(current_account),
        profile=profile,
        roles=role_manager.role_names(current_account.id),
    )
