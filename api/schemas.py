"""
Pydantic schemas for cohort, student and user resources.

Bodies use the camelCase field names clients send; ids go out as ``_id``.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Cohorts
# ═══════════════════════════════════════════════════════════════════════════════


class CohortCreate(_CamelModel):
    cohort_slug: str
    cohort_name: str
    program: Optional[str] = None
    format: Optional[str] = None
    campus: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    in_progress: bool = False
    program_manager: str
    lead_teacher: str
    total_hours: int = 360


class CohortUpdate(_CamelModel):
    cohort_slug: Optional[str] = None
    cohort_name: Optional[str] = None
    program: Optional[str] = None
    format: Optional[str] = None
    campus: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    in_progress: Optional[bool] = None
    program_manager: Optional[str] = None
    lead_teacher: Optional[str] = None
    total_hours: Optional[int] = None

    @field_validator("cohort_slug", "cohort_name", "program_manager", "lead_teacher")
    @classmethod
    def reject_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("must not be null")
        return value


class CohortOut(_CamelModel):
    cohort_id: uuid.UUID = Field(alias="_id")
    cohort_slug: str
    cohort_name: str
    program: Optional[str] = None
    format: Optional[str] = None
    campus: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    in_progress: Optional[bool] = None
    program_manager: str
    lead_teacher: str
    total_hours: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Students
# ═══════════════════════════════════════════════════════════════════════════════


class StudentCreate(_CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    linkedin_url: str = ""
    languages: List[str] = Field(default_factory=list)
    program: Optional[str] = None
    background: str = ""
    image: str = "https://i.imgur.com/r8bo8u7.png"
    projects: List[Any] = Field(default_factory=list)
    cohort: Optional[uuid.UUID] = None


class StudentUpdate(_CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    languages: Optional[List[str]] = None
    program: Optional[str] = None
    background: Optional[str] = None
    image: Optional[str] = None
    projects: Optional[List[Any]] = None
    cohort: Optional[uuid.UUID] = None

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def reject_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("must not be null")
        return value


class StudentOut(_CamelModel):
    student_id: uuid.UUID = Field(alias="_id")
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    languages: List[str] = Field(default_factory=list)
    program: Optional[str] = None
    background: Optional[str] = None
    image: Optional[str] = None
    projects: List[Any] = Field(default_factory=list)
    cohort: Optional[CohortOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Users
# ═══════════════════════════════════════════════════════════════════════════════


class UserOut(_CamelModel):
    user_id: uuid.UUID = Field(alias="_id")
    email: str
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserEnvelope(BaseModel):
    user: UserOut
