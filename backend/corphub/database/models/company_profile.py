"""
Company profile model.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from corphub.database.base import Base

# Columns a caller may change through a partial update. Anything else
# (id, owner_id, timestamps) is never written from caller input.
UPDATABLE_FIELDS = (
    "company_name",
    "address",
    "city",
    "state",
    "country",
    "postal_code",
    "website",
    "logo_url",
    "banner_url",
    "industry",
    "founded_date",
    "description",
    "social_links",
)

IMAGE_FIELDS = ("logo_url", "banner_url")


class CompanyProfile(Base):
    """The single company profile a user registers and maintains."""
    __tablename__ = "company_profiles"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Ownership (one profile per user)
    owner_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    company_name = Column(String(200), nullable=False)

    # Location
    address = Column(String(500), nullable=True)
    city = Column(String(50), nullable=True)
    state = Column(String(50), nullable=True)
    country = Column(String(50), nullable=True)
    postal_code = Column(String(20), nullable=True)

    website = Column(String(500), nullable=True)
    logo_url = Column(String(1000), nullable=True)
    banner_url = Column(String(1000), nullable=True)
    industry = Column(String(100), nullable=True)
    founded_date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    social_links = Column(JSON, nullable=True)  # {"linkedin": "https://...", ...}

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Every read carries the owner's display fields
    owner = relationship("User", lazy="joined", innerjoin=True)

    __table_args__ = (
        UniqueConstraint("owner_id", name="uq_company_profiles_owner_id"),
        Index("idx_company_profiles_created_at", "created_at"),
        Index("idx_company_profiles_industry", "industry"),
    )

    @property
    def owner_name(self):
        return self.owner.full_name if self.owner is not None else None

    @property
    def owner_email(self):
        return self.owner.email if self.owner is not None else None

    @property
    def owner_mobile(self):
        return self.owner.mobile_no if self.owner is not None else None

    @property
    def owner_email_verified(self):
        return self.owner.is_email_verified if self.owner is not None else None

    @property
    def owner_mobile_verified(self):
        return self.owner.is_mobile_verified if self.owner is not None else None

    def image_urls(self) -> dict:
        return {field: getattr(self, field) for field in IMAGE_FIELDS}

    def __repr__(self):
        return f"<CompanyProfile(id={self.id}, company_name={self.company_name}, owner_id={self.owner_id})>"


# Company names are unique regardless of case
Index(
    "uq_company_profiles_company_name_lower",
    func.lower(CompanyProfile.company_name),
    unique=True,
)
