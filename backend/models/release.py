# backend/models/release.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

# Release lifecycle:
#   start -> draftnxt/draft -> editorial -> approved -> sent
#   editorial -> draft (rejected) | draftnxt (retracted by owner)
LOCKED_STATUSES = frozenset({"editorial", "approved", "sent"})


class Release(Base):
    __tablename__ = "releases"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String(36), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("company.id"), nullable=False, index=True)

    title = Column(String(180), nullable=True)
    slug = Column(String(200), nullable=True)
    abstract = Column(Text, nullable=True)
    body = Column(Text, nullable=True)
    pullquote = Column(Text, nullable=True)
    location = Column(String(120), nullable=True)
    timezone = Column(String(32), nullable=True)
    distribution = Column(String(64), nullable=True) # comma-separated upgrade types, or "standard"

    status = Column(String(10), default="start", nullable=False, index=True)
    is_deleted = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    release_at = Column(DateTime(timezone=True), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)

    company = relationship("Company")
    queue = relationship("Queue", back_populates="release", uselist=False)
    notes = relationship("ReleaseNote", order_by="ReleaseNote.id")

    @property
    def is_locked(self) -> bool:
        return self.status in LOCKED_STATUSES


# Editorial queue entry; at most one per release
class Queue(Base):
    __tablename__ = "queue"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String(36), unique=True, nullable=False)
    release_id = Column(Integer, ForeignKey("releases.id"), unique=True, nullable=False)
    editor_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    editor_name = Column(String(32), default="")

    submitted = Column(DateTime(timezone=True), nullable=True)
    checkedout = Column(DateTime(timezone=True), nullable=True) # set while an editor holds the item
    approved = Column(DateTime(timezone=True), nullable=True)
    returned = Column(DateTime(timezone=True), nullable=True)

    release = relationship("Release", back_populates="queue")


class ReleaseNote(Base):
    __tablename__ = "release_notes"

    id = Column(Integer, primary_key=True, index=True)
    pr_id = Column(Integer, ForeignKey("releases.id"), nullable=False, index=True)
    from_id = Column(Integer, nullable=False)
    from_name = Column(String(32), default="")
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


# Stakeholder sign-off requested by the owner; answered through a public link
class Approval(Base):
    __tablename__ = "approvals"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String(36), unique=True, nullable=False, index=True)
    release_id = Column(Integer, ForeignKey("releases.id"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("company.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    email = Column(String(128), nullable=True)
    email_to = Column(String(64), nullable=True) # approver's display name
    notes = Column(Text, nullable=True)

    signature = Column(String(64), nullable=True)
    feedback = Column(Text, nullable=True)
    approved = Column(Boolean, default=False, nullable=False)
    requested_at = Column(DateTime(timezone=True), nullable=True)
    signed_at = Column(DateTime(timezone=True), nullable=True)

    release = relationship("Release")
