# tracker/models/user.py
import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, func, text, true

from tracker.db import Base


class UserRole(str, enum.Enum):
    admin = "admin"
    supervisor = "supervisor"
    user = "user"
    new_user = "new_user"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.new_user)
    # sha256 hex of (api key + pepper); plaintext is shown once at creation
    api_key_hash = Column(String(64), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, server_default=true(), default=True)

    # Activity tracking
    last_active = Column(DateTime(timezone=True), nullable=True)
    total_active_time = Column(Integer, nullable=False, server_default=text("0"), default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
