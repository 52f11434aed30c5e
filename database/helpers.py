"""
Database helper functions — repository-style reads and writes for users,
cohorts and students.

Every helper takes the request's ``AsyncSession``; writes are committed
here so the caller sees persisted rows (and unique-constraint violations)
before it builds a response.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Cohort, Student, User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    """Parse an id from a URL; malformed ids resolve to ``None``."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (TypeError, ValueError):
        return None


UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when ``exc`` comes from a unique index, not NOT NULL or a foreign key."""
    code = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    if code:
        return code == UNIQUE_VIOLATION_SQLSTATE
    # SQLite reports constraint failures by message only.
    return "UNIQUE constraint failed" in str(exc.orig)


# ── Users ───────────────────────────────────────────────────────────────


async def find_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    email: str,
    password_hash: str,
    name: str,
) -> User:
    """Insert a user row. Raises ``IntegrityError`` on a duplicate email."""
    user = User(user_id=uuid.uuid4(), email=email, password_hash=password_hash, name=name)
    session.add(user)
    await _commit(session)
    return user


async def get_user(session: AsyncSession, user_id: str) -> Optional[User]:
    uid = _to_uuid(user_id)
    if uid is None:
        return None
    return await session.get(User, uid)


# ── Cohorts ─────────────────────────────────────────────────────────────


async def list_cohorts(session: AsyncSession) -> List[Cohort]:
    result = await session.execute(select(Cohort).order_by(Cohort.created_at))
    return list(result.scalars().all())


async def get_cohort(session: AsyncSession, cohort_id: str) -> Optional[Cohort]:
    cid = _to_uuid(cohort_id)
    if cid is None:
        return None
    return await session.get(Cohort, cid)


async def create_cohort(session: AsyncSession, data: Dict[str, Any]) -> Cohort:
    cohort = Cohort(cohort_id=uuid.uuid4(), **data)
    session.add(cohort)
    await _commit(session)
    return cohort


async def update_cohort(
    session: AsyncSession, cohort_id: str, changes: Dict[str, Any]
) -> Optional[Cohort]:
    cohort = await get_cohort(session, cohort_id)
    if cohort is None:
        return None
    for key, value in changes.items():
        setattr(cohort, key, value)
    await _commit(session)
    await session.refresh(cohort)
    return cohort


async def delete_cohort(session: AsyncSession, cohort_id: str) -> bool:
    cohort = await get_cohort(session, cohort_id)
    if cohort is None:
        return False
    # Not every backend enforces ON DELETE SET NULL, so detach explicitly.
    await session.execute(
        update(Student)
        .where(Student.cohort_id == cohort.cohort_id)
        .values(cohort_id=None)
    )
    await session.delete(cohort)
    await _commit(session)
    return True


# ── Students ────────────────────────────────────────────────────────────


async def list_students(
    session: AsyncSession, cohort_id: Optional[str] = None
) -> List[Student]:
    stmt = select(Student).order_by(Student.created_at)
    if cohort_id is not None:
        cid = _to_uuid(cohort_id)
        if cid is None:
            return []
        stmt = stmt.where(Student.cohort_id == cid)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_student(session: AsyncSession, student_id: str) -> Optional[Student]:
    sid = _to_uuid(student_id)
    if sid is None:
        return None
    result = await session.execute(
        select(Student)
        .where(Student.student_id == sid)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_student(session: AsyncSession, data: Dict[str, Any]) -> Student:
    student = Student(student_id=uuid.uuid4(), **data)
    session.add(student)
    await _commit(session)
    return await get_student(session, student.student_id)


async def update_student(
    session: AsyncSession, student_id: str, changes: Dict[str, Any]
) -> Optional[Student]:
    student = await get_student(session, student_id)
    if student is None:
        return None
    for key, value in changes.items():
        setattr(student, key, value)
    await _commit(session)
    return await get_student(session, student.student_id)


async def delete_student(session: AsyncSession, student_id: str) -> bool:
    student = await get_student(session, student_id)
    if student is None:
        return False
    await session.delete(student)
    await _commit(session)
    return True


async def _commit(session: AsyncSession) -> None:
    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise
