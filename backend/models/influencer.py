from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


# Marketplace seller profile; at most one per user
class Influencer(Base):
    __tablename__ = "influencer"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    uuid = Column(String(36), unique=True, nullable=False)
    avatar = Column(Text, nullable=True)
    name = Column(String(64), nullable=True)
    bio = Column(Text, nullable=True)
    completed_jobs = Column(Integer, default=0, nullable=False)
    cell = Column(String(20), nullable=True)
    altemail = Column(String(128), nullable=True)

    user = relationship("User")
