from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Star(Base):
    """A user's star on a repository. The row's existence is the whole state."""
    __tablename__ = 'stars'
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    repository_id = Column(String(36), ForeignKey('repositories.id', ondelete='CASCADE'), primary_key=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    repository = relationship("Repository", back_populates="stars")

    __table_args__ = (
        Index('idx_stars_repository_id', 'repository_id'),
    )


class Follow(Base):
    """Directed follow relation between two users."""
    __tablename__ = 'follows'
    follower_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    following_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        CheckConstraint('follower_id <> following_id', name='ck_follows_not_self'),
        Index('idx_follows_following_id', 'following_id'),
    )
