from sqlalchemy import (
    String, Integer, Boolean, Enum, ForeignKey, DateTime, Time, Float, JSON
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime, time
from typing import Optional
from .database import Base
import enum

# Enums

class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"

class AssignmentStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"

class Weekday(str, enum.Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

class BlockSource(str, enum.Enum):
    ASSIGNMENT = "assignment"   # capacity-aware weekly plan
    TOPIC_PLAN = "topic_plan"   # round-robin steps, may overlap

class ReportCategory(str, enum.Enum):
    BUG = "bug"
    ABUSE = "abuse"
    ACCOUNT = "account"
    FEEDBACK = "feedback"
    OTHER = "other"

class ReportStatus(str, enum.Enum):
    OPEN = "open"
    RESOLVED = "resolved"

# Models

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String, unique=True, index=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True)
    name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    hashed_password: Mapped[str] = mapped_column(String)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)  # False means blocked by an admin
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), default=UserRole.USER)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    # Relationships
    assignments = relationship("Assignment", back_populates="user", cascade="all, delete-orphan")
    checklist_tasks = relationship("ChecklistTask", back_populates="user", cascade="all, delete-orphan")
    study_sessions = relationship("StudySession", back_populates="user", cascade="all, delete-orphan")
    planner_blocks = relationship("PlannerBlock", back_populates="user", cascade="all, delete-orphan")
    topic_plans = relationship("TopicPlan", back_populates="user", cascade="all, delete-orphan")
    reports = relationship("Report", back_populates="user", cascade="all, delete-orphan")


class Assignment(Base):
    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)

    title: Mapped[str] = mapped_column(String, nullable=False)
    course: Mapped[Optional[str]] = mapped_column(String, default="")
    due: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    effort: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # hours
    status: Mapped[AssignmentStatus] = mapped_column(Enum(AssignmentStatus), default=AssignmentStatus.NOT_STARTED)

    remind_24h: Mapped[bool] = mapped_column(Boolean, default=True)
    remind_6h: Mapped[bool] = mapped_column(Boolean, default=True)
    remind_1h: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="assignments")
    topic_plans = relationship("TopicPlan", back_populates="assignment")

    @property
    def display_title(self) -> str:
        return f"{self.course}: {self.title}" if self.course else self.title


class ChecklistTask(Base):
    __tablename__ = "checklist_tasks"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    text: Mapped[str] = mapped_column(String, nullable=False)
    done: Mapped[bool] = mapped_column(Boolean, default=False)
    topic_plan_id: Mapped[Optional[int]] = mapped_column(ForeignKey("topic_plans.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    user = relationship("User", back_populates="checklist_tasks")


class StudySession(Base):
    """A recurring weekly timetable entry."""
    __tablename__ = "study_sessions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    day: Mapped[Weekday] = mapped_column(Enum(Weekday), nullable=False)
    start: Mapped[time] = mapped_column(Time, nullable=False)
    end: Mapped[time] = mapped_column(Time, nullable=False)
    focus: Mapped[Optional[str]] = mapped_column(String, default="")

    user = relationship("User", back_populates="study_sessions")


class PlannerBlock(Base):
    """A persisted PlacedBlock. `position` keeps booking order."""
    __tablename__ = "planner_blocks"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    day: Mapped[str] = mapped_column(String, nullable=False)
    start: Mapped[str] = mapped_column(String(5), nullable=False)
    end: Mapped[str] = mapped_column(String(5), nullable=False)
    label: Mapped[str] = mapped_column(String, nullable=False)
    source: Mapped[BlockSource] = mapped_column(Enum(BlockSource), default=BlockSource.ASSIGNMENT)
    source_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    position: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    user = relationship("User", back_populates="planner_blocks")


class TopicPlan(Base):
    __tablename__ = "topic_plans"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    assignment_id: Mapped[Optional[int]] = mapped_column(ForeignKey("assignments.id"), nullable=True)

    topic: Mapped[str] = mapped_column(String, nullable=False)
    topic_type: Mapped[str] = mapped_column(String, nullable=False)
    total_hours: Mapped[int] = mapped_column(Integer, default=1)
    due: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    outline: Mapped[list] = mapped_column(JSON, default=list)
    key_questions: Mapped[list] = mapped_column(JSON, default=list)
    steps: Mapped[list] = mapped_column(JSON, default=list)  # [{"text": ..., "duration": ...}]
    queries: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    user = relationship("User", back_populates="topic_plans")
    assignment = relationship("Assignment", back_populates="topic_plans")


class AuditEvent(Base):
    __tablename__ = "audit_events"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    type: Mapped[str] = mapped_column(String, index=True)
    data: Mapped[dict] = mapped_column(JSON, default=dict)
    user_agent: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, index=True)


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    subject: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[ReportCategory] = mapped_column(Enum(ReportCategory), default=ReportCategory.OTHER)
    details: Mapped[str] = mapped_column(String, nullable=False)
    route: Mapped[Optional[str]] = mapped_column(String, default="")
    status: Mapped[ReportStatus] = mapped_column(Enum(ReportStatus), default=ReportStatus.OPEN)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    user = relationship("User", back_populates="reports")
