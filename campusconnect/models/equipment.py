from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from campusconnect.database import Base


class Equipment(Base):
    """Equipment model, maps to the equipment table"""
    __tablename__ = "equipment"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    # available, borrowed, maintenance; only borrowing transitions move it in or out of borrowed
    status = Column(String(20), nullable=False, default="available")
    available_until = Column(DateTime, nullable=True)
    deposit = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    conditions = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    organization = relationship("Organization", back_populates="equipment")
    requests = relationship("EquipmentRequest", back_populates="equipment", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Equipment {self.name}>"
