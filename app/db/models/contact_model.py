from sqlalchemy import Column, String, ForeignKey, DateTime, Index, UniqueConstraint, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.schemas.contact_schema import ADDRESS_MAX_LENGTH, NAME_MAX_LENGTH, PHONE_MAX_LENGTH


class Contact(Base):
    __tablename__ = "contacts"
    # Per-owner uniqueness is enforced here; the application check only gives early feedback.
    __table_args__ = (
        UniqueConstraint("owner_id", "email", name="uq_contacts_owner_email"),
        UniqueConstraint("owner_id", "phone", name="uq_contacts_owner_phone"),
        Index("ix_contacts_owner_created_at", "owner_id", "created_at"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(PHONE_MAX_LENGTH), nullable=False)
    address = Column(String(ADDRESS_MAX_LENGTH), nullable=False, server_default="")
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    owner = relationship("User", back_populates="contacts")

    def __repr__(self):
        return f"<Contact(id={self.id}, email={self.email}, owner={self.owner_id})>"
