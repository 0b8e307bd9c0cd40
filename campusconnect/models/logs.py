from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from campusconnect.database import Base


class SystemLog(Base):
    """System log model, maps to the system_logs table"""
    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    level = Column(String(10), nullable=False, index=True)  # info, warning, error
    component = Column(String(20), nullable=False, index=True)  # auth, organization, service, equipment, connection, request, message
    message = Column(Text, nullable=False)
    details = Column(Text, nullable=True)  # JSON
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True, index=True)
    ip_address = Column(String(45), nullable=True)

    # Relationships
    organization = relationship("Organization", foreign_keys=[organization_id])

    def __repr__(self) -> str:
        return f"<SystemLog {self.level} {self.component}>"
