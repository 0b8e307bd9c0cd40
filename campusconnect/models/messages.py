from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from campusconnect.database import Base


class Message(Base):
    """Direct message model, maps to the messages table"""
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    # Relationships
    sender = relationship("Organization", foreign_keys=[sender_id])
    receiver = relationship("Organization", foreign_keys=[receiver_id])

    __table_args__ = (
        CheckConstraint("sender_id <> receiver_id", name="ck_message_distinct"),
        Index("ix_messages_receiver_read", "receiver_id", "read"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Message {self.id} {self.sender_id}->{self.receiver_id}>"
