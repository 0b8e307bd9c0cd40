from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from campusconnect.schemas import ResponseBase, reject_null


# Request models
class OrganizationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="Organization name")
    description: Optional[str] = Field(None, description="About the organization")
    email: Optional[str] = Field(None, max_length=100, description="Contact email")
    avatar: Optional[str] = Field(None, max_length=500, description="Avatar image URL")

    check_not_null = field_validator("name", mode="before")(reject_null)


# Response models
class OrganizationProfile(BaseModel):
    id: int = Field(..., description="Organization ID")
    name: str = Field(..., description="Organization name")
    username: str = Field(..., description="Login name")
    description: Optional[str] = Field(None, description="About the organization")
    email: Optional[str] = Field(None, description="Contact email")
    avatar: Optional[str] = Field(None, description="Avatar image URL")
    createdAt: datetime = Field(..., description="Creation time")


class OrganizationResponse(ResponseBase):
    data: OrganizationProfile


class OrganizationListData(BaseModel):
    organizations: List[OrganizationProfile]


class OrganizationList(ResponseBase):
    data: OrganizationListData
