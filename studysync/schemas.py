from pydantic import BaseModel, Field, EmailStr, field_validator, model_validator
from datetime import datetime, time, timezone
from typing import Optional, List, Dict
from .models import UserRole, AssignmentStatus, Weekday, BlockSource, ReportCategory, ReportStatus

# Upper bound on a single assignment estimate, in hours
MAX_EFFORT_HOURS = 1000


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store every timestamp as naive UTC; SQLite drops offsets anyway."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _required_text(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("must not be blank")
    return value

# ----------------- User Schemas ---------------------

class UserBase(BaseModel):
    username: str
    email: EmailStr
    name: Optional[str] = None

class UserCreate(UserBase):
    password: str = Field(..., min_length=6)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value):
        return _required_text(value)

class UserSchema(UserBase):
    id: int
    is_active: bool
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True

class UserLogin(BaseModel):
    username: str
    password: str

class RefreshTokenRequest(BaseModel):
    refresh_token: str

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str

class UserInfo(BaseModel):
    id: int
    username: str
    email: str
    name: Optional[str] = None
    is_active: bool
    role: UserRole
    assignments: int = 0
    checklist_tasks: int = 0
    study_sessions: int = 0
    completion_percentage: int = 0
    suspicious: bool = False

# ----------------- Assignment Schemas ---------------------

class AssignmentCreate(BaseModel):
    title: str
    course: Optional[str] = ""
    due: datetime
    effort: Optional[float] = Field(None, ge=0, le=MAX_EFFORT_HOURS, allow_inf_nan=False, description="Estimated effort in hours")
    status: AssignmentStatus = AssignmentStatus.NOT_STARTED
    remind_24h: bool = True
    remind_6h: bool = True
    remind_1h: bool = True

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _required_text(value)

    @field_validator("course")
    @classmethod
    def strip_course(cls, value):
        return (value or "").strip()

    @field_validator("due")
    @classmethod
    def due_to_utc(cls, value):
        return _naive_utc(value)

class AssignmentUpdate(BaseModel):
    title: Optional[str] = None
    course: Optional[str] = None
    due: Optional[datetime] = None
    effort: Optional[float] = Field(None, ge=0, le=MAX_EFFORT_HOURS, allow_inf_nan=False)
    status: Optional[AssignmentStatus] = None
    remind_24h: Optional[bool] = None
    remind_6h: Optional[bool] = None
    remind_1h: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return None if value is None else _required_text(value)

    @field_validator("due")
    @classmethod
    def due_to_utc(cls, value):
        return _naive_utc(value)

class AssignmentOut(BaseModel):
    id: int
    title: str
    course: Optional[str] = ""
    due: datetime
    effort: Optional[float] = None
    status: AssignmentStatus
    remind_24h: bool
    remind_6h: bool
    remind_1h: bool
    due_soon: bool = False
    progress: int = 0

    class Config:
        from_attributes = True

class ReminderOut(BaseModel):
    assignment_id: int
    offset_hours: int
    remind_at: datetime

# ----------------- Checklist Schemas ---------------------

class ChecklistTaskCreate(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value):
        return _required_text(value)

class ChecklistTaskUpdate(BaseModel):
    text: Optional[str] = None
    done: Optional[bool] = None

class ChecklistTaskOut(BaseModel):
    id: int
    text: str
    done: bool
    topic_plan_id: Optional[int] = None

    class Config:
        from_attributes = True

class ChecklistOut(BaseModel):
    tasks: List[ChecklistTaskOut]
    done: int
    total: int

# ----------------- Timetable Schemas ---------------------

class StudySessionCreate(BaseModel):
    day: Weekday
    start: time
    end: time
    focus: Optional[str] = ""

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self

class StudySessionOut(BaseModel):
    id: int
    day: Weekday
    start: time
    end: time
    focus: Optional[str] = ""

    class Config:
        from_attributes = True

# ----------------- Planner Schemas ---------------------

class PlannerBlockOut(BaseModel):
    day: str
    start: str
    end: str
    label: str
    source: BlockSource = BlockSource.ASSIGNMENT
    source_id: Optional[int] = None

    class Config:
        from_attributes = True

class PlacementSummary(BaseModel):
    item_id: Optional[int] = None
    label: str
    requested_units: int
    placed_units: int
    unplaced_units: int

class WeekPlanOut(BaseModel):
    blocks: List[PlannerBlockOut]
    week: Dict[str, List[PlannerBlockOut]]
    summary: List[PlacementSummary] = []
    unplaced_units: int = 0

# ----------------- Topic Plan Schemas ---------------------

class TopicPlanCreate(BaseModel):
    topic: str
    assignment_id: Optional[int] = None

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, value):
        return _required_text(value)

class StepOut(BaseModel):
    text: str
    duration: float

class TopicPlanOut(BaseModel):
    id: int
    assignment_id: Optional[int] = None
    topic: str
    topic_type: str
    total_hours: int
    due: Optional[datetime] = None
    outline: List[str]
    key_questions: List[str]
    steps: List[StepOut]
    queries: List[str]

    class Config:
        from_attributes = True

# ----------------- Calendar Schemas ---------------------

class ShareCodeOut(BaseModel):
    code: str
    count: int

class ShareImportRequest(BaseModel):
    code: str

class SharedAssignment(BaseModel):
    """Shape of one entry inside a share code."""
    title: str
    course: Optional[str] = ""
    due: datetime
    effort: Optional[float] = Field(None, ge=0, le=MAX_EFFORT_HOURS, allow_inf_nan=False)
    status: AssignmentStatus = AssignmentStatus.NOT_STARTED

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _required_text(value)

    @field_validator("course")
    @classmethod
    def strip_course(cls, value):
        return (value or "").strip()

    @field_validator("due")
    @classmethod
    def due_to_utc(cls, value):
        return _naive_utc(value)

class ShareImportResult(BaseModel):
    imported: int
    total: int

# ----------------- Progress Schemas ---------------------

class ProgressOut(BaseModel):
    total: int
    submitted: int
    in_progress: int
    due_soon: int
    percentage: int
    assignments: List[AssignmentOut]

# ----------------- Report / Admin Schemas ---------------------

class ReportCreate(BaseModel):
    subject: str
    category: ReportCategory = ReportCategory.OTHER
    details: str
    route: Optional[str] = ""

    @field_validator("subject", "details")
    @classmethod
    def not_blank(cls, value):
        return _required_text(value)

class ReportOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    subject: str
    category: ReportCategory
    details: str
    route: Optional[str] = ""
    status: ReportStatus
    created_at: datetime

    class Config:
        from_attributes = True

class AuditEventOut(BaseModel):
    id: int
    type: str
    data: dict
    user_agent: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class AdminSummary(BaseModel):
    users: int
    assignments: int
    submitted: int
    in_progress: int
    due_soon: int
