from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from campusconnect.database import Base


class Organization(Base):
    """Organization model, maps to the organizations table"""
    __tablename__ = "organizations"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    description = Column(Text, nullable=True)
    email = Column(String(100), nullable=True)
    avatar = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    services = relationship("Service", back_populates="organization", cascade="all, delete-orphan")
    equipment = relationship("Equipment", back_populates="organization", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Organization {self.username}>"
