from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from campusconnect.database import Base


class Service(Base):
    """Service listing model, maps to the services table"""
    __tablename__ = "services"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    service_type = Column(String(50), nullable=False, index=True)
    pricing = Column(String(10), nullable=False, default="free")  # free, paid
    price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    availability = Column(String(200), nullable=False)
    capacity = Column(Integer, nullable=True)
    status = Column(String(10), nullable=False, default="active")  # active, inactive
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    organization = relationship("Organization", back_populates="services")
    requests = relationship("ServiceRequest", back_populates="service", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Service {self.title}>"
