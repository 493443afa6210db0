from sqlalchemy import Column, String, DateTime, Enum as SQLEnum
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class UserRole(str, enum.Enum):
    """Account roles"""
    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"


class UserAccount(Base):
    """Registered account with a bcrypt password hash"""
    __tablename__ = "accounts"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(SQLEnum(UserRole, values_callable=lambda obj: [e.value for e in obj]), default=UserRole.STUDENT, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<UserAccount {self.email}>"
