# backend/models/users.py
import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base


# Capabilities granted to an authenticated user
class Permission(str, enum.Enum):
    MANAGE_PRODUCTS = "manage_products"
    MANAGE_USERS = "manage_users"
    REVIEW_RELEASES = "review_releases"
    VIEW_AUDIT_LOG = "view_audit_log"


# Role flag -> permissions it carries
ROLE_PERMISSIONS = {
    "is_admin": frozenset(Permission),
    "is_staff": frozenset({Permission.MANAGE_PRODUCTS, Permission.REVIEW_RELEASES}),
    "is_editor": frozenset({Permission.REVIEW_RELEASES}),
}


# Represents a dashboard account; sessions are issued elsewhere
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(254), unique=True, nullable=False, index=True)
    first_name = Column(String(48), nullable=True)
    last_name = Column(String(48), nullable=True)
    partner_id = Column(Integer, default=1)

    # Role flags
    is_admin = Column(Boolean, default=False, nullable=False)
    is_staff = Column(Boolean, default=False, nullable=False)
    is_editor = Column(Boolean, default=False, nullable=False)

    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    subscription = relationship("UserSubscription", back_populates="user", uselist=False)

    @property
    def permissions(self) -> frozenset:
        granted = frozenset()
        for flag, perms in ROLE_PERMISSIONS.items():
            if getattr(self, flag):
                granted = granted | perms
        return granted

    def can(self, permission: Permission) -> bool:
        return permission in self.permissions


# Per-user mutable credit counters (subscription-style credits)
class UserSubscription(Base):
    __tablename__ = "user_subscription"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    plan_id = Column(Integer, default=0)
    name = Column(String(48), nullable=True)

    remaining_pr = Column(Integer, CheckConstraint("remaining_pr >= 0"), default=0, nullable=False)
    remaining_pluspr = Column(Integer, CheckConstraint("remaining_pluspr >= 0"), default=0, nullable=False)
    newsdb_credits = Column(Integer, CheckConstraint("newsdb_credits >= 0"), default=0, nullable=False)

    start_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="subscription")
