"""Authentication API endpoints"""

import uuid
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.config import settings
from qrmenu.database import get_db
from qrmenu.models.client import Client
from qrmenu.models.user import User, UserRole
from qrmenu.schemas.auth import Token, RefreshRequest, UserCreate, UserResponse

router = APIRouter()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

ACCESS = "access"
REFRESH = "refresh"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _encode(user: User, token_type: str, lifetime: timedelta, **claims) -> str:
    claims.update(sub=str(user.id), type=token_type, exp=datetime.utcnow() + lifetime)
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(user: User) -> str:
    """Short-lived bearer token carrying the user's role and client"""
    return _encode(
        user,
        ACCESS,
        timedelta(minutes=settings.access_token_expire_minutes),
        client_id=user.client_id,
        role=user.role.value,
    )


def create_refresh_token(user: User) -> str:
    """Single-use token exchanged at /auth/refresh; the jti makes every issue distinct"""
    return _encode(
        user,
        REFRESH,
        timedelta(days=settings.refresh_token_expire_days),
        jti=uuid.uuid4().hex,
    )


def _decode_user_id(token: str, expected_type: str) -> Optional[int]:
    """User id from a token of the given type, or None if it is unusable"""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
        if payload.get("type") != expected_type:
            return None
        return int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        return None


def _unauthorized(detail: str, bearer: bool = False) -> HTTPException:
    headers = {"WWW-Authenticate": "Bearer"} if bearer else None
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, headers=headers)


async def _active_user(db: AsyncSession, *criteria) -> Optional[User]:
    """The user matching ``criteria``, or None when missing or disabled"""
    result = await db.execute(select(User).where(*criteria))
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        return None
    return user


async def _issue_tokens(db: AsyncSession, user: User) -> Token:
    """Mint a token pair and store the refresh half, replacing any earlier one"""
    tokens = Token(
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user),
        expires_in=settings.access_token_expire_minutes * 60,
    )
    user.refresh_token = tokens.refresh_token
    await db.commit()
    return tokens


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from token"""
    user_id = _decode_user_id(token, ACCESS)
    user = await _active_user(db, User.id == user_id) if user_id is not None else None
    if user is None:
        raise _unauthorized("Could not validate credentials", bearer=True)
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Verify user is active"""
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user


def require_role(required_role: UserRole):
    """Dependency factory for role-based access control"""
    async def role_checker(current_user: User = Depends(get_current_active_user)) -> User:
        if not current_user.has_permission(required_role):
            raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return current_user
    return role_checker


def verify_client_access(client_id: int, current_user: User) -> User:
    """Let super admins through; everyone else only into their own client"""
    if current_user.role != UserRole.SUPER_ADMIN and current_user.client_id != client_id:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Access denied to this client")
    return current_user


def client_scope(current_user: User) -> Optional[int]:
    """Client id to filter listings by, None when the user sees every client"""
    if current_user.role == UserRole.SUPER_ADMIN:
        return None
    return current_user.client_id


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Exchange email and password for a token pair"""
    result = await db.execute(select(User).where(User.email == form_data.username.lower()))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(form_data.password, user.hashed_password):
        raise _unauthorized("Incorrect email or password", bearer=True)
    if not user.is_active:
        raise _unauthorized("User account is disabled")

    user.last_login = datetime.utcnow()
    return await _issue_tokens(db, user)


@router.post("/refresh", response_model=Token)
async def refresh_token(
    request: RefreshRequest,
    db: AsyncSession = Depends(get_db),
):
    """Rotate the refresh token; the presented one stops working"""
    user_id = _decode_user_id(request.refresh_token, REFRESH)
    user = None
    if user_id is not None:
        user = await _active_user(
            db, User.id == user_id, User.refresh_token == request.refresh_token
        )
    if user is None:
        raise _unauthorized("Invalid refresh token")
    return await _issue_tokens(db, user)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_active_user),
):
    """Get current user information"""
    return current_user


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    current_user: User = Depends(require_role(UserRole.SUPER_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Create an admin surface account (SuperAdmin only)"""
    email = user_data.email.lower()
    result = await db.execute(select(User.id).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    if user_data.role != UserRole.SUPER_ADMIN:
        if user_data.client_id is None or await db.get(Client, user_data.client_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")

    user = User(
        email=email,
        hashed_password=get_password_hash(user_data.password),
        name=user_data.name,
        role=user_data.role,
        client_id=user_data.client_id if user_data.role != UserRole.SUPER_ADMIN else None,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    return user


@router.post("/logout")
async def logout(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Logout user by invalidating refresh token"""
    current_user.refresh_token = None
    await db.commit()
    return {"message": "Successfully logged out"}
