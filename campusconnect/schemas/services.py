from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from campusconnect.core.enums import Pricing, ServiceStatus
from campusconnect.schemas import ResponseBase, reject_null


# Request models
class ServiceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, description="Service title")
    description: str = Field(..., min_length=1, description="Service description")
    serviceType: str = Field(..., min_length=1, max_length=50, description="Category")
    pricing: Pricing = Field(Pricing.free, description="free or paid")
    price: Optional[float] = Field(None, ge=0, description="Price when pricing is paid")
    availability: str = Field(..., min_length=1, max_length=200, description="Availability text")
    capacity: Optional[int] = Field(None, gt=0, description="How many can be served at once")
    status: ServiceStatus = Field(ServiceStatus.active, description="active or inactive")
    # Ignored; the owner is always the authenticated organization
    organizationId: Optional[int] = Field(None, description="Ignored, forced to the caller")

    @model_validator(mode="after")
    def paid_services_need_a_price(self):
        if self.pricing == Pricing.paid and self.price is None:
            raise ValueError("price is required when pricing is paid")
        if self.pricing == Pricing.free:
            self.price = None
        return self


class ServiceUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    serviceType: Optional[str] = Field(None, min_length=1, max_length=50)
    pricing: Optional[Pricing] = None
    price: Optional[float] = Field(None, ge=0)
    availability: Optional[str] = Field(None, min_length=1, max_length=200)
    capacity: Optional[int] = Field(None, gt=0)
    status: Optional[ServiceStatus] = None
    organizationId: Optional[int] = Field(None, description="Ownership cannot be transferred")

    check_not_null = field_validator(
        "title", "description", "serviceType", "pricing", "availability", "status", mode="before"
    )(reject_null)


# Response models
class Service(BaseModel):
    id: int = Field(..., description="Service ID")
    organizationId: int = Field(..., description="Owning organization ID")
    title: str
    description: str
    serviceType: str
    pricing: Pricing
    price: Optional[float] = None
    availability: str
    capacity: Optional[int] = None
    status: ServiceStatus
    createdAt: datetime


class ServiceResponse(ResponseBase):
    data: Service


class ServiceListData(BaseModel):
    services: List[Service]


class ServiceList(ResponseBase):
    data: ServiceListData
