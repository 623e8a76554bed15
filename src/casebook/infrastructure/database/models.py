"""SQLAlchemy database models."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InstitutionDB(Base):
    """SQLAlchemy model for institutions table (read-only here)."""

    __tablename__ = "institutions"

    id = Column(String(36), primary_key=True)
    acronym = Column(String(50), nullable=True)
    title = Column(String(255), nullable=True)


class UserDB(Base):
    """SQLAlchemy model for users table (read-only here)."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(100), nullable=True)
    role = Column(String(50), nullable=True, index=True)
    grade = Column(String(50), nullable=True)
    institution_id = Column(String(36), ForeignKey("institutions.id"), nullable=True)


class CaseDB(Base):
    """SQLAlchemy model for cases table."""

    __tablename__ = "cases"

    id = Column(String(36), primary_key=True)

    title = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    language = Column(String(50), nullable=True)
    domain = Column(String(100), nullable=True)
    specialty = Column(String(100), nullable=True)
    keywords = Column(Text, nullable=True)
    original_date = Column(String(50), nullable=True)
    complexity = Column(String(50), nullable=True)

    author_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    author_grade = Column(String(50), nullable=True)
    institution_id = Column(String(36), ForeignKey("institutions.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class CaseVersionDB(Base):
    """SQLAlchemy model for case_versions table.

    ``seq`` is the storage-assigned tie-break when two versions share a
    creation timestamp.
    """

    __tablename__ = "case_versions"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), nullable=False, unique=True)
    case_id = Column(String(36), ForeignKey("cases.id"), nullable=False)
    source = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_case_versions_case_order", "case_id", "created_at", "seq"),
    )


class PermissionDB(Base):
    """SQLAlchemy model for permissions table."""

    __tablename__ = "permissions"

    id = Column(String(36), primary_key=True)
    entity = Column(String(50), nullable=False)
    subject = Column(String(36), nullable=True)
    clearance = Column(String(10), nullable=False)
    table_name = Column("table", String(50), nullable=False)
    table_id = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_permissions_resource", "table", "table_id"),
    )


class UserCaseLinkDB(Base):
    """SQLAlchemy model for the users_cases pivot table."""

    __tablename__ = "users_cases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    case_id = Column(String(36), ForeignKey("cases.id"), nullable=False, index=True)
    permission = Column(String(10), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class ArtifactDB(Base):
    """SQLAlchemy model for artifacts table (owned by the artifact collaborator)."""

    __tablename__ = "artifacts"

    id = Column(String(36), primary_key=True)
    case_id = Column(String(36), ForeignKey("cases.id"), nullable=True, index=True)
    relative_path = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
