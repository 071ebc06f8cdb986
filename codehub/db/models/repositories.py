from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from .base import Base, now_utc, new_id


class Repository(Base):
    __tablename__ = 'repositories'
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    owner_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    language = Column(String(50), nullable=True)
    # Denormalized counters, only ever changed through relative UPDATEs
    stars_count = Column(Integer, nullable=False, default=0, server_default='0')
    forks_count = Column(Integer, nullable=False, default=0, server_default='0')
    watchers_count = Column(Integer, nullable=False, default=0, server_default='0')
    is_private = Column(Boolean, nullable=False, default=False)
    readme = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    owner = relationship("User", lazy="joined")
    stars = relationship("Star", back_populates="repository", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint('owner_id', 'name', name='uq_repositories_owner_name'),
        CheckConstraint('stars_count >= 0', name='ck_repositories_stars_count_non_negative'),
        Index('idx_repositories_public_updated', 'is_private', 'updated_at'),
        Index('idx_repositories_owner_id', 'owner_id'),
    )
