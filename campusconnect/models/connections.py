from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from campusconnect.database import Base


class Connection(Base):
    """Connection between two organizations, maps to the connections table"""
    __tablename__ = "connections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    requester_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    # Normalized unordered pair: org_low_id = min(requester, receiver), org_high_id = max(...)
    org_low_id = Column(Integer, nullable=False)
    org_high_id = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, accepted, rejected
    message = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    requester = relationship("Organization", foreign_keys=[requester_id])
    receiver = relationship("Organization", foreign_keys=[receiver_id])

    __table_args__ = (
        UniqueConstraint("org_low_id", "org_high_id", name="uq_connection_pair"),
        CheckConstraint("requester_id <> receiver_id", name="ck_connection_distinct"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Connection {self.requester_id}->{self.receiver_id} {self.status}>"
