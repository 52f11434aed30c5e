"""
SQLAlchemy ORM models for users, cohorts and students.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class Cohort(Base):
    __tablename__ = "cohorts"

    cohort_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    cohort_slug = Column(String(128), unique=True, nullable=False)
    cohort_name = Column(String(255), nullable=False)
    program = Column(String(64))
    format = Column(String(32))
    campus = Column(String(64))
    start_date = Column(DateTime(timezone=True), default=_utcnow)
    end_date = Column(DateTime(timezone=True), nullable=True)
    in_progress = Column(Boolean, default=False)
    program_manager = Column(String(128), nullable=False)
    lead_teacher = Column(String(128), nullable=False)
    total_hours = Column(Integer, default=360)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    students = relationship("Student", back_populates="cohort", passive_deletes=True)


class Student(Base):
    __tablename__ = "students"

    student_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name = Column(String(128), nullable=False)
    last_name = Column(String(128), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    phone = Column(String(64))
    linkedin_url = Column(String(512), default="")
    languages = Column(JSON, default=list)
    program = Column(String(64))
    background = Column(Text, default="")
    image = Column(String(512), default="https://i.imgur.com/r8bo8u7.png")
    projects = Column(JSON, default=list)
    cohort_id = Column(Uuid, ForeignKey("cohorts.cohort_id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    cohort = relationship("Cohort", back_populates="students", lazy="selectin")
