"""Pydantic schemas for Web API.

Request and response models for auth, courses, books, sessions,
feedback, contests, progress, assessments, mentor chat and playground.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from skillup import __version__


# =============================================================================
# COMMON
# =============================================================================


def _strip(value):
    """Trim surrounding whitespace so blank strings fail min_length."""
    if isinstance(value, str):
        return value.strip()
    return value


class ActionResponse(BaseModel):
    """Success envelope; ``success=False`` carries a soft-failure reason."""

    success: bool = True
    message: str | None = None


# =============================================================================
# AUTH / USER SCHEMAS
# =============================================================================


class SignupRequest(BaseModel):
    """Request body for creating an account."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=200)
    password: str = Field(..., min_length=1, max_length=200)
    department: str = Field(default="", max_length=50)

    strip_name = field_validator("name", mode="before")(_strip)


class LoginRequest(BaseModel):
    """Request body for logging in."""

    email: str = Field(..., max_length=200)
    password: str = Field(..., max_length=200)


class UserResponse(BaseModel):
    """Public view of a user (no credential material)."""

    id: int
    name: str
    email: str
    department: str | None = None
    coding_progress: int = 0
    aptitude_progress: int = 0
    comm_progress: int = 0
    subscription: str = "free"


class AuthResponse(BaseModel):
    """Response for signup and login."""

    success: bool = True
    user: UserResponse
    token: str
    token_type: str = "bearer"


class ProgressUpdateRequest(BaseModel):
    """Set one progress counter to an absolute value."""

    type: Literal["coding", "aptitude", "comm"]
    value: int = Field(..., ge=0, le=100)


class SubscriptionRequest(BaseModel):
    """Change subscription tier."""

    tier: Literal["free", "premium"]


class UserUpdateResponse(BaseModel):
    """Response carrying the updated user record."""

    success: bool = True
    user: UserResponse


# =============================================================================
# COURSE SCHEMAS
# =============================================================================


class CourseResponse(BaseModel):
    """Response for a course."""

    id: int
    title: str
    description: str | None = None
    department: str | None = None
    instructor: str | None = None
    image: str | None = None
    notes_url: str | None = None
    video_url: str | None = None


class EnrollRequest(BaseModel):
    """Request to enroll in a course."""

    course_id: int


# =============================================================================
# BOOK SCHEMAS
# =============================================================================


class BookCreate(BaseModel):
    """Request body for listing a book."""

    title: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    department: str | None = Field(default=None, max_length=50)
    image: str | None = Field(default=None, max_length=500)
    location: str | None = Field(default=None, max_length=200)
    stock: int | None = Field(default=None, ge=0)

    strip_title = field_validator("title", mode="before")(_strip)


class BookResponse(BaseModel):
    """Response for a listing."""

    id: int
    title: str
    price: float
    seller_id: int | None = None
    department: str | None = None
    image: str | None = None
    location: str | None = None
    stock: int
    list_price: int


class BookCreatedResponse(BaseModel):
    """Response after listing a book."""

    success: bool = True
    book: BookResponse


class PurchaseRequest(BaseModel):
    """Request to buy one copy of a listing."""

    book_id: int


class PurchaseResponse(BaseModel):
    """Response after a purchase."""

    success: bool = True
    book_id: int
    stock: int


class CheckoutRequest(BaseModel):
    """Request to buy every item in the cart."""

    book_ids: list[int] = Field(..., min_length=1, max_length=50)


class CheckoutLineResponse(BaseModel):
    """Outcome for one cart item."""

    book_id: int
    purchased: bool
    title: str | None = None
    price: float = 0.0
    message: str | None = None


class CheckoutResponse(BaseModel):
    """Outcome of a checkout."""

    success: bool
    items: list[CheckoutLineResponse]
    purchased_count: int
    total: float


# =============================================================================
# SESSION / FEEDBACK SCHEMAS
# =============================================================================


class MentorResponse(BaseModel):
    """A bookable mentor."""

    name: str
    role: str
    image: str = ""
    default: bool = False


class MentorListResponse(BaseModel):
    """Response for list of mentors."""

    mentors: list[MentorResponse]
    count: int


class SessionBookingRequest(BaseModel):
    """Request to book a mentorship session."""

    mentor_name: str = Field(..., min_length=1, max_length=100)
    date: str = Field(..., description="YYYY-MM-DD")
    time: str = Field(..., description="HH:MM")

    strip_mentor_name = field_validator("mentor_name", mode="before")(_strip)


class SessionBookingResponse(BaseModel):
    """A booked session."""

    id: int
    mentor_name: str
    date: str
    time: str


class FeedbackRequest(BaseModel):
    """Request body for feedback."""

    content: str = Field(..., min_length=1, max_length=5000)


# =============================================================================
# CONTEST SCHEMAS
# =============================================================================


class ContestResponse(BaseModel):
    """Response for a contest."""

    id: int
    title: str
    date: str | None = None
    description: str | None = None
    registered: bool | None = None


class ContestRegisterRequest(BaseModel):
    """Request to register for a contest."""

    contest_id: int


class QuestionResponse(BaseModel):
    """A contest question with decoded options."""

    id: int
    contest_id: int
    question: str
    options: list[str]
    correct_option: int


class AnswersRequest(BaseModel):
    """Answers keyed by question id."""

    answers: dict[int, int] = Field(default_factory=dict)


class ScoreResponse(BaseModel):
    """Graded contest submission."""

    score: int
    total: int
    percentage: int


# =============================================================================
# ASSESSMENT SCHEMAS
# =============================================================================


class AssessmentCategorySummary(BaseModel):
    """A category without its questions."""

    id: str
    title: str
    icon: str = ""
    question_count: int


class AssessmentTrackResponse(BaseModel):
    """A track with category summaries."""

    id: str
    title: str
    categories: list[AssessmentCategorySummary]


class AssessmentTrackListResponse(BaseModel):
    """Response for list of tracks."""

    tracks: list[AssessmentTrackResponse]
    count: int


class AssessmentQuestionResponse(BaseModel):
    """Question shown to the student (no answer key)."""

    id: int
    question: str
    options: list[str]


class AssessmentCategoryResponse(BaseModel):
    """A category with its questions."""

    track: str
    id: str
    title: str
    questions: list[AssessmentQuestionResponse]


class AssessmentSubmitRequest(BaseModel):
    """Answers for one category test."""

    category: str
    answers: dict[int, int] = Field(default_factory=dict)


class AssessmentResultResponse(BaseModel):
    """Graded assessment and resulting progress."""

    track: str
    category: str
    score: int
    total: int
    percentage: int
    boost: int
    previous_progress: int
    new_progress: int
    user: UserResponse


# =============================================================================
# MENTOR CHAT SCHEMAS
# =============================================================================


class ChatRequest(BaseModel):
    """A student message to the AI mentor."""

    message: str = Field(..., min_length=1, max_length=2000)


class ChatResponse(BaseModel):
    """The mentor's reply."""

    role: Literal["ai"] = "ai"
    text: str
    fallback: bool = False


# =============================================================================
# PLAYGROUND SCHEMAS
# =============================================================================


class ProblemResponse(BaseModel):
    """A practice problem."""

    index: int
    title: str
    difficulty: str
    description: str
    example: str
    starter_code: str


class ProblemListResponse(BaseModel):
    """Response for list of problems."""

    problems: list[ProblemResponse]
    count: int


class RunRequest(BaseModel):
    """Request to run code against a problem."""

    problem_index: int = Field(default=0, ge=0)
    code: str = Field(..., max_length=20000)


class RunResponse(BaseModel):
    """Result of a run."""

    problem: str
    success: bool
    passed: int
    total: int
    runtime_ms: int
    output: str


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = __version__
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
