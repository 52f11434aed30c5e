"""
REST API routes for cohorts, students and users.

Every route here sits behind ``require_auth``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas import (
    CohortCreate,
    CohortOut,
    CohortUpdate,
    StudentCreate,
    StudentOut,
    StudentUpdate,
    UserEnvelope,
    UserOut,
)
from auth.dependencies import db_session, require_auth
from database import helpers

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_auth)])


@contextmanager
def _store_errors(message: str, duplicate: Optional[str] = None) -> Iterator[None]:
    """Map store failures to a 500 (or a 400 for unique-field clashes)."""
    try:
        yield
    except IntegrityError as exc:
        if duplicate is None or not helpers.is_unique_violation(exc):
            logger.exception(message)
            raise HTTPException(status_code=500, detail=message) from exc
        logger.info("%s: %s", duplicate, exc.orig)
        raise HTTPException(status_code=400, detail=duplicate) from exc
    except SQLAlchemyError as exc:
        logger.exception(message)
        raise HTTPException(status_code=500, detail=message) from exc


def _not_found(resource: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found")


async def _student_fields(session: AsyncSession, body: Dict[str, Any]) -> Dict[str, Any]:
    """Rename ``cohort`` to its column and reject references to missing cohorts."""
    if "cohort" in body:
        body["cohort_id"] = body.pop("cohort")
    if body.get("cohort_id") is not None:
        with _store_errors("Error fetching cohort"):
            cohort = await helpers.get_cohort(session, body["cohort_id"])
        if cohort is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cohort not found")
    return body


# ── Cohorts ─────────────────────────────────────────────────────────────


@router.get("/cohorts", response_model=List[CohortOut])
async def list_cohorts(session: AsyncSession = Depends(db_session)):
    with _store_errors("Error fetching cohorts"):
        return await helpers.list_cohorts(session)


@router.get("/cohorts/{cohort_id}", response_model=CohortOut)
async def get_cohort(cohort_id: str, session: AsyncSession = Depends(db_session)):
    with _store_errors("Error fetching cohort"):
        cohort = await helpers.get_cohort(session, cohort_id)
    if cohort is None:
        raise _not_found("Cohort")
    return cohort


@router.post("/cohorts", response_model=CohortOut, status_code=status.HTTP_201_CREATED)
async def create_cohort(body: CohortCreate, session: AsyncSession = Depends(db_session)):
    data = body.model_dump(exclude_none=True)
    with _store_errors("Error creating cohort", duplicate="Cohort slug already exists"):
        cohort = await helpers.create_cohort(session, data)
    logger.info("Created cohort %s (%s)", cohort.cohort_slug, cohort.cohort_id)
    return cohort


@router.put("/cohorts/{cohort_id}", response_model=CohortOut)
async def update_cohort(
    cohort_id: str,
    body: CohortUpdate,
    session: AsyncSession = Depends(db_session),
):
    changes = body.model_dump(exclude_unset=True)
    with _store_errors("Error updating cohort", duplicate="Cohort slug already exists"):
        cohort = await helpers.update_cohort(session, cohort_id, changes)
    if cohort is None:
        raise _not_found("Cohort")
    return cohort


@router.delete("/cohorts/{cohort_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cohort(cohort_id: str, session: AsyncSession = Depends(db_session)):
    with _store_errors("Error deleting cohort"):
        deleted = await helpers.delete_cohort(session, cohort_id)
    if not deleted:
        raise _not_found("Cohort")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Students ────────────────────────────────────────────────────────────


@router.get("/students", response_model=List[StudentOut])
async def list_students(session: AsyncSession = Depends(db_session)):
    with _store_errors("Error fetching students"):
        return await helpers.list_students(session)


@router.get("/students/cohort/{cohort_id}", response_model=List[StudentOut])
async def list_students_by_cohort(cohort_id: str, session: AsyncSession = Depends(db_session)):
    with _store_errors("Error fetching students"):
        return await helpers.list_students(session, cohort_id=cohort_id)


@router.get("/students/{student_id}", response_model=StudentOut)
async def get_student(student_id: str, session: AsyncSession = Depends(db_session)):
    with _store_errors("Error fetching student"):
        student = await helpers.get_student(session, student_id)
    if student is None:
        raise _not_found("Student")
    return student


@router.post("/students", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
async def create_student(body: StudentCreate, session: AsyncSession = Depends(db_session)):
    data = await _student_fields(session, body.model_dump())
    with _store_errors("Error creating student", duplicate="Student email already exists"):
        student = await helpers.create_student(session, data)
    logger.info("Created student %s (%s)", student.email, student.student_id)
    return student


@router.put("/students/{student_id}", response_model=StudentOut)
async def update_student(
    student_id: str,
    body: StudentUpdate,
    session: AsyncSession = Depends(db_session),
):
    changes = await _student_fields(session, body.model_dump(exclude_unset=True))
    with _store_errors("Error updating student", duplicate="Student email already exists"):
        student = await helpers.update_student(session, student_id, changes)
    if student is None:
        raise _not_found("Student")
    return student


@router.delete("/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(student_id: str, session: AsyncSession = Depends(db_session)):
    with _store_errors("Error deleting student"):
        deleted = await helpers.delete_student(session, student_id)
    if not deleted:
        raise _not_found("Student")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Users ───────────────────────────────────────────────────────────────


@router.get("/users/{user_id}", response_model=UserEnvelope)
async def get_user(user_id: str, session: AsyncSession = Depends(db_session)):
    """Public profile fields of a user; the password digest is never returned."""
    with _store_errors("Error fetching user"):
        user = await helpers.get_user(session, user_id)
    if user is None:
        raise _not_found("User")
    return {"user": UserOut.model_validate(user)}
