"""Authentication schemas"""

from datetime import datetime

from pydantic import BaseModel, Field


class Token(BaseModel):
    """JWT token response"""

    access_token: str
    token_type: str = "bearer"


class UserCreate(BaseModel):
    """User registration schema"""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)


class UserLogin(BaseModel):
    """User login schema"""

    email: str
    password: str


class UserResponse(BaseModel):
    """User response schema"""

    id: int
    name: str
    email: str
    role: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(Token):
    """Register/login response: bearer token plus the user"""

    user: UserResponse
