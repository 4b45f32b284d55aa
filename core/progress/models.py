"""
SQLAlchemy ORM models for the remote progress store.

One row per (learner, word) rating and one resumable session per learner.
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class UserWordProgress(Base):
    """
    Star rating of one word for one learner.
    """
    __tablename__ = 'user_word_progress'

    # Primary key: composite of user_id and word_id (upsert target)
    user_id = Column(String(255), primary_key=True, nullable=False)
    word_id = Column(String(255), primary_key=True, nullable=False)

    star_rating = Column(Integer, nullable=False, default=0)  # 0-5
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<UserWordProgress({self.user_id}, {self.word_id}, stars={self.star_rating})>"


class FlashcardProgress(Base):
    """
    Resumable session of one learner: cursor, ordered draw ids and package.
    """
    __tablename__ = 'flashcard_progress'

    user_id = Column(String(255), primary_key=True, nullable=False)

    current_position = Column(Integer, nullable=False, default=0)
    current_round_words = Column(JSON, nullable=False, default=list)  # Ordered word ids (repeats allowed)
    selected_package = Column(String(255), nullable=True)  # NULL means all packages

    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<FlashcardProgress({self.user_id}, position={self.current_position})>"
