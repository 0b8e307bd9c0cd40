from pydantic import BaseModel, Field

from campusconnect.schemas import ResponseBase


class DashboardStats(BaseModel):
    activeServices: int = Field(..., description="Services with status active")
    equipmentCount: int = Field(..., description="Listed equipment")
    networkConnections: int = Field(..., description="Accepted connections")
    unreadMessages: int = Field(..., description="Unread messages addressed to the organization")
    pendingIncomingRequests: int = Field(..., description="Pending requests on owned services and equipment")


class DashboardStatsResponse(ResponseBase):
    data: DashboardStats
