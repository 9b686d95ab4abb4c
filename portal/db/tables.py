"""Database table models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.db.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """Candidate account (identity is managed by the auth provider)."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    profile: Mapped["CandidateProfile | None"] = relationship(back_populates="user", uselist=False)
    applications: Mapped[list["Application"]] = relationship(back_populates="user")


class CandidateProfile(Base):
    """Reusable personal, academic and professional details."""

    __tablename__ = "candidate_profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), unique=True)
    full_name: Mapped[str] = mapped_column(String(255), default="")
    email: Mapped[str] = mapped_column(String(255), default="")

    # Personal
    phone: Mapped[str | None] = mapped_column(String(32), default=None)
    date_of_birth: Mapped[str | None] = mapped_column(String(10), default=None)  # YYYY-MM-DD
    nationality: Mapped[str | None] = mapped_column(String(100), default=None)
    gender: Mapped[str | None] = mapped_column(String(20), default=None)
    address: Mapped[str | None] = mapped_column(Text, default=None)

    # Academic
    class_x_school: Mapped[str | None] = mapped_column(String(255), default=None)
    class_x_year: Mapped[int | None] = mapped_column(Integer, default=None)
    class_x_percentage: Mapped[float | None] = mapped_column(Float, default=None)
    class_xii_school: Mapped[str | None] = mapped_column(String(255), default=None)
    class_xii_year: Mapped[int | None] = mapped_column(Integer, default=None)
    class_xii_percentage: Mapped[float | None] = mapped_column(Float, default=None)
    degree_institution: Mapped[str | None] = mapped_column(String(255), default=None)
    degree_name: Mapped[str | None] = mapped_column(String(255), default=None)
    degree_year: Mapped[int | None] = mapped_column(Integer, default=None)
    degree_cgpa: Mapped[float | None] = mapped_column(Float, default=None)

    # Professional
    current_company: Mapped[str | None] = mapped_column(String(255), default=None)
    current_ctc: Mapped[float | None] = mapped_column(Float, default=None)
    expected_ctc: Mapped[float | None] = mapped_column(Float, default=None)

    primary_resume_url: Mapped[str | None] = mapped_column(Text, default=None)
    profile_image_url: Mapped[str | None] = mapped_column(Text, default=None)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    user: Mapped["User"] = relationship(back_populates="profile")


class Job(Base):
    """An open position."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(255))
    location: Mapped[str] = mapped_column(String(255))
    job_type: Mapped[str] = mapped_column(String(50))  # Full-time/Part-time/Contract/...
    job_function: Mapped[str | None] = mapped_column(String(50), default=None)
    description: Mapped[str] = mapped_column(Text, default="")
    minimum_experience: Mapped[int | None] = mapped_column(Integer, default=None)
    requirements: Mapped[list | None] = mapped_column(JSON, default=None)
    responsibilities: Mapped[list | None] = mapped_column(JSON, default=None)
    salary_range: Mapped[str | None] = mapped_column(String(100), default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    applications: Mapped[list["Application"]] = relationship(back_populates="job")


class Application(Base):
    """Submitted application with a frozen copy of the candidate's details."""

    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("user_id", "job_id", name="uq_applications_user_job"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"))
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id"))
    status: Mapped[str] = mapped_column(String(30), default="Applied")

    snapshot_name: Mapped[str] = mapped_column(String(255), default="")
    snapshot_email: Mapped[str] = mapped_column(String(255), default="")
    snapshot_phone: Mapped[str | None] = mapped_column(String(32), default=None)
    snapshot_date_of_birth: Mapped[str | None] = mapped_column(String(10), default=None)
    snapshot_nationality: Mapped[str | None] = mapped_column(String(100), default=None)
    snapshot_gender: Mapped[str | None] = mapped_column(String(20), default=None)
    snapshot_address: Mapped[str | None] = mapped_column(Text, default=None)
    snapshot_class_x_school: Mapped[str | None] = mapped_column(String(255), default=None)
    snapshot_class_x_year: Mapped[int | None] = mapped_column(Integer, default=None)
    snapshot_class_x_percentage: Mapped[float | None] = mapped_column(Float, default=None)
    snapshot_class_xii_school: Mapped[str | None] = mapped_column(String(255), default=None)
    snapshot_class_xii_year: Mapped[int | None] = mapped_column(Integer, default=None)
    snapshot_class_xii_percentage: Mapped[float | None] = mapped_column(Float, default=None)
    snapshot_degree_institution: Mapped[str | None] = mapped_column(String(255), default=None)
    snapshot_degree_name: Mapped[str | None] = mapped_column(String(255), default=None)
    snapshot_degree_year: Mapped[int | None] = mapped_column(Integer, default=None)
    snapshot_degree_cgpa: Mapped[float | None] = mapped_column(Float, default=None)
    snapshot_current_company: Mapped[str | None] = mapped_column(String(255), default=None)
    snapshot_current_ctc: Mapped[float | None] = mapped_column(Float, default=None)
    snapshot_expected_ctc: Mapped[float | None] = mapped_column(Float, default=None)
    snapshot_resume_url: Mapped[str | None] = mapped_column(Text, default=None)

    applied_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    user: Mapped["User"] = relationship(back_populates="applications")
    job: Mapped["Job"] = relationship(back_populates="applications")
