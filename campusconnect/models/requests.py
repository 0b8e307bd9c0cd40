from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from campusconnect.database import Base


class ServiceRequest(Base):
    """Service request model, maps to the service_requests table"""
    __tablename__ = "service_requests"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    requester_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        String(20),
        nullable=False,
        default="pending",
        # pending, accepted, rejected, completed
    )
    message = Column(Text, nullable=True)
    date_requested = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    service = relationship("Service", back_populates="requests")
    requester = relationship("Organization", foreign_keys=[requester_id])

    def __repr__(self) -> str:
        return f"<ServiceRequest {self.id} for service {self.service_id}>"


class EquipmentRequest(Base):
    """Equipment borrowing request model, maps to the equipment_requests table"""
    __tablename__ = "equipment_requests"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id", ondelete="CASCADE"), nullable=False, index=True)
    borrower_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        String(20),
        nullable=False,
        default="pending",
        # pending, approved, rejected, returned
    )
    message = Column(Text, nullable=True)
    borrow_from = Column(DateTime, nullable=True)
    borrow_until = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    equipment = relationship("Equipment", back_populates="requests")
    borrower = relationship("Organization", foreign_keys=[borrower_id])

    def __repr__(self) -> str:
        return f"<EquipmentRequest {self.id} for equipment {self.equipment_id}>"
