from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base


# A brand owned by a user; releases are published under it
class Company(Base):
    __tablename__ = "company"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String(36), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    company_name = Column(String(100), nullable=False)

    # Primary contact person
    first_name = Column(String(48), nullable=True)
    last_name = Column(String(48), nullable=True)
    title = Column(String(48), nullable=True)

    website = Column(String(128), nullable=True)
    email = Column(String(128), nullable=True)
    phone = Column(String(30), nullable=True)
    logo_url = Column(Text, nullable=True)

    # Address
    addr1 = Column(String(100), nullable=True)
    addr2 = Column(String(100), nullable=True)
    city = Column(String(60), nullable=True)
    state = Column(String(2), nullable=True)
    postal_code = Column(String(10), nullable=True)
    country_code = Column(String(5), nullable=True)

    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    contacts = relationship("Contact", back_populates="company", cascade="all, delete-orphan")


# Media/press contact attached to a company
class Contact(Base):
    __tablename__ = "contact"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String(36), unique=True, nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("company.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    first_name = Column(String(48), nullable=True)
    last_name = Column(String(48), nullable=True)
    title = Column(String(48), nullable=True)
    email = Column(String(128), nullable=True)
    phone = Column(String(30), nullable=True)
    is_primary = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    company = relationship("Company", back_populates="contacts")
