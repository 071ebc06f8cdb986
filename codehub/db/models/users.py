from sqlalchemy import Column, String, DateTime, Text
from .base import Base, now_utc, new_id


class User(Base):
    __tablename__ = 'users'
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    image = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)
