"""
User model.

Accounts are owned by the authentication subsystem; the profile core
only reads them through the company_profiles -> users join.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String

from corphub.database.base import Base


class User(Base):
    """Registered platform user."""
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, unique=True, index=True)
    mobile_no = Column(String(20), nullable=True, unique=True)
    full_name = Column(String(255), nullable=True)

    is_email_verified = Column(Boolean, default=False, nullable=False)
    is_mobile_verified = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
