"""
Student and candidate profile models, used as sources for display names.
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from app.db.base import Base


class Student(Base):
    """Registered student profile."""

    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, index=True, nullable=False)
    salutation = Column(String, nullable=True)
    first_name = Column(String, nullable=True)
    middle_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    name = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Candidate(Base):
    """Candidate profile created by employees or job applications."""

    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, index=True, nullable=False)
    salutation = Column(String, nullable=True)
    first_name = Column(String, nullable=True)
    middle_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    name = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
