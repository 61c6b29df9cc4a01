"""Authentication API routes"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..models.user import User
from ..schemas.auth import AuthResponse, UserCreate, UserLogin, UserResponse
from ..services.auth_service import AuthService
from ..services.log_service import log_service

router = APIRouter(prefix="/api/auth", tags=["auth"])

security = HTTPBearer(auto_error=False)


def _set_token_cookie(response: Response, token: str):
    response.set_cookie(
        settings.COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="none" if settings.COOKIE_SECURE else "lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from bearer token or auth cookie"""
    token = credentials.credentials if credentials else None
    token = token or request.cookies.get(settings.COOKIE_NAME)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = AuthService.verify_token(token)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await AuthService(db).get_user_by_id(user_id)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    """Require the admin role"""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    return current_user


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def register(
    user_data: UserCreate, response: Response, db: AsyncSession = Depends(get_db)
):
    """
    Register a new user (the first user becomes admin)
    """
    auth_service = AuthService(db)

    if await auth_service.get_user_by_email(user_data.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Email already registered"
        )

    role = "user" if await auth_service.has_users() else "admin"
    user = await auth_service.create_user(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=role,
    )
    log_service.info(f"Registered user {user.id} ({role})")

    access_token = auth_service.create_access_token(data={"sub": str(user.id)})
    _set_token_cookie(response, access_token)

    return {"user": user, "access_token": access_token, "token_type": "bearer"}


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin, response: Response, db: AsyncSession = Depends(get_db)
):
    """
    Login with email and password
    """
    auth_service = AuthService(db)

    user = await auth_service.authenticate_user(
        email=credentials.email, password=credentials.password
    )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    access_token = auth_service.create_access_token(data={"sub": str(user.id)})
    _set_token_cookie(response, access_token)

    return {"user": user, "access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """
    Get current user info
    """
    return current_user


@router.post("/logout")
async def logout(response: Response):
    """
    Logout user (clears the auth cookie; bearer clients discard their token)
    """
    response.delete_cookie(
        settings.COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="none" if settings.COOKIE_SECURE else "lax",
    )
    return {"message": "Logged out"}
