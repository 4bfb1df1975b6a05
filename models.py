# models.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    name = Column(String)
    dob = Column(DateTime(timezone=True))
    address = Column(String)
    description = Column(String)
    # Set once on insert, never touched by updates
    created_at = Column("createdAt", DateTime(timezone=True), default=utcnow)
