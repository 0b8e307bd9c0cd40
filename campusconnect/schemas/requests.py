from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from campusconnect.core.enums import EquipmentRequestStatus, ServiceRequestStatus
from campusconnect.schemas import ResponseBase


# Request models
class ServiceRequestCreate(BaseModel):
    message: Optional[str] = Field(None, max_length=2000, description="Message to the service owner")
    dateRequested: Optional[datetime] = Field(None, description="When the service is needed")
    requesterId: Optional[int] = Field(None, description="Must be the caller when supplied")


class ServiceRequestStatusUpdate(BaseModel):
    status: ServiceRequestStatus = Field(..., description="Target status")


class EquipmentRequestCreate(BaseModel):
    message: Optional[str] = Field(None, max_length=2000, description="Message to the equipment owner")
    borrowFrom: Optional[datetime] = Field(None, description="Borrowing start")
    borrowUntil: Optional[datetime] = Field(None, description="Borrowing end")
    borrowerId: Optional[int] = Field(None, description="Must be the caller when supplied")

    @model_validator(mode="after")
    def borrow_until_after_borrow_from(self):
        if self.borrowFrom and self.borrowUntil and self.borrowUntil < self.borrowFrom:
            raise ValueError("borrowUntil must not be earlier than borrowFrom")
        return self


class EquipmentRequestStatusUpdate(BaseModel):
    status: EquipmentRequestStatus = Field(..., description="Target status")


# Response models
class ServiceRequest(BaseModel):
    id: int = Field(..., description="Service request ID")
    serviceId: int
    requesterId: int
    status: ServiceRequestStatus
    message: Optional[str] = None
    dateRequested: Optional[datetime] = None
    createdAt: datetime


class ServiceRequestResponse(ResponseBase):
    data: ServiceRequest


class ServiceRequestListData(BaseModel):
    requests: List[ServiceRequest]


class ServiceRequestList(ResponseBase):
    data: ServiceRequestListData


class EquipmentRequest(BaseModel):
    id: int = Field(..., description="Equipment request ID")
    equipmentId: int
    borrowerId: int
    status: EquipmentRequestStatus
    message: Optional[str] = None
    borrowFrom: Optional[datetime] = None
    borrowUntil: Optional[datetime] = None
    createdAt: datetime


class EquipmentRequestResponse(ResponseBase):
    data: EquipmentRequest


class EquipmentRequestListData(BaseModel):
    requests: List[EquipmentRequest]


class EquipmentRequestList(ResponseBase):
    data: EquipmentRequestListData
