from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from campusconnect.core.enums import ConnectionStatus
from campusconnect.schemas import ResponseBase


# Request models
class ConnectionCreate(BaseModel):
    receiverId: int = Field(..., description="Organization to connect with")
    requesterId: Optional[int] = Field(None, description="Must be the caller when supplied")
    message: Optional[str] = Field(None, max_length=1000, description="Introduction message")


class ConnectionStatusUpdate(BaseModel):
    status: ConnectionStatus = Field(..., description="accepted or rejected")


# Response models
class Connection(BaseModel):
    id: int = Field(..., description="Connection ID")
    requesterId: int
    receiverId: int
    status: ConnectionStatus
    message: Optional[str] = None
    createdAt: datetime


class ConnectionResponse(ResponseBase):
    data: Connection


class ConnectionListData(BaseModel):
    connections: List[Connection]


class ConnectionList(ResponseBase):
    data: ConnectionListData
