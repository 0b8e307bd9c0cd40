from typing import Optional

from pydantic import BaseModel, Field

from campusconnect.schemas import ResponseBase
from campusconnect.schemas.organizations import OrganizationProfile


# Request models
class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Organization name")
    username: str = Field(..., min_length=1, max_length=50, description="Login name")
    password: str = Field(..., min_length=6, max_length=72, description="Password")
    description: Optional[str] = Field(None, description="About the organization")
    email: Optional[str] = Field(None, max_length=100, description="Contact email")
    avatar: Optional[str] = Field(None, max_length=500, description="Avatar image URL")


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Login name")
    password: str = Field(..., min_length=1, description="Password")


# Response models
class TokenData(BaseModel):
    token: str = Field(..., description="JWT bearer token")
    tokenType: str = Field("bearer", description="Token type")
    organization: OrganizationProfile


class LoginResponse(ResponseBase):
    data: TokenData


class RegisterResponse(ResponseBase):
    data: OrganizationProfile
