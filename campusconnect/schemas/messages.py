from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from campusconnect.schemas import ResponseBase


# Request models
class MessageCreate(BaseModel):
    receiverId: int = Field(..., description="Receiving organization ID")
    content: str = Field(..., min_length=1, max_length=5000, description="Message body")
    senderId: Optional[int] = Field(None, description="Must be the caller when supplied")

    @field_validator("content")
    def content_not_blank(cls, v):
        if not v.strip():
            raise ValueError("content must not be blank")
        return v


# Response models
class Message(BaseModel):
    id: int = Field(..., description="Message ID")
    senderId: int
    receiverId: int
    content: str
    read: bool
    createdAt: datetime


class MessageResponse(ResponseBase):
    data: Message


class ConversationData(BaseModel):
    organizationId: int = Field(..., description="The other participant")
    messages: List[Message]
    markedRead: int = Field(0, description="Messages marked as read by this retrieval")


class ConversationResponse(ResponseBase):
    data: ConversationData


class ConversationSummary(BaseModel):
    organizationId: int = Field(..., description="The other participant")
    organizationName: Optional[str] = None
    lastMessage: Message
    unreadCount: int


class ConversationListData(BaseModel):
    conversations: List[ConversationSummary]


class ConversationList(ResponseBase):
    data: ConversationListData


class UnreadCountData(BaseModel):
    count: int


class UnreadCountResponse(ResponseBase):
    data: UnreadCountData


class MarkReadData(BaseModel):
    organizationId: int
    markedRead: int


class MarkReadResponse(ResponseBase):
    data: MarkReadData
