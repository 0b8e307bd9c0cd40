from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from campusconnect.core.enums import EquipmentStatus
from campusconnect.schemas import ResponseBase, reject_null


def _not_borrowed(v: Optional[EquipmentStatus]) -> Optional[EquipmentStatus]:
    if v == EquipmentStatus.borrowed:
        raise ValueError("borrowed is set by approving a borrowing request")
    return v


# Request models
class EquipmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Equipment name")
    description: str = Field(..., min_length=1, description="Equipment description")
    imageUrl: Optional[str] = Field(None, max_length=500, description="Image URL")
    status: EquipmentStatus = Field(EquipmentStatus.available, description="available or maintenance")
    availableUntil: Optional[datetime] = Field(None, description="Listing deadline")
    deposit: Optional[float] = Field(None, ge=0, description="Deposit amount")
    conditions: Optional[str] = Field(None, description="Borrowing conditions")
    organizationId: Optional[int] = Field(None, description="Ignored, forced to the caller")

    check_status = field_validator("status")(_not_borrowed)


class EquipmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    imageUrl: Optional[str] = Field(None, max_length=500)
    status: Optional[EquipmentStatus] = None
    availableUntil: Optional[datetime] = None
    deposit: Optional[float] = Field(None, ge=0)
    conditions: Optional[str] = None
    organizationId: Optional[int] = Field(None, description="Ownership cannot be transferred")

    check_status = field_validator("status")(_not_borrowed)
    check_not_null = field_validator("name", "description", "status", mode="before")(reject_null)


# Response models
class Equipment(BaseModel):
    id: int = Field(..., description="Equipment ID")
    organizationId: int = Field(..., description="Owning organization ID")
    name: str
    description: str
    imageUrl: Optional[str] = None
    status: EquipmentStatus
    availableUntil: Optional[datetime] = None
    deposit: Optional[float] = None
    conditions: Optional[str] = None
    createdAt: datetime


class EquipmentResponse(ResponseBase):
    data: Equipment


class EquipmentListData(BaseModel):
    equipment: List[Equipment]


class EquipmentList(ResponseBase):
    data: EquipmentListData
