"""Mentorship session and feedback endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from skillup.config.mentors import list_mentors
from skillup.db.bookings_repository import add_feedback, book_session, list_sessions
from skillup.db.users_repository import UserRecord
from skillup.utils.validators import InvalidSlotError, validate_session_slot
from skillup.web.deps import get_current_user
from skillup.web.schemas import (
    ActionResponse,
    FeedbackRequest,
    MentorListResponse,
    MentorResponse,
    SessionBookingRequest,
    SessionBookingResponse,
)

router = APIRouter(prefix="/api", tags=["sessions"])


@router.get("/mentors", response_model=MentorListResponse)
async def get_mentors() -> MentorListResponse:
    """List bookable mentors."""
    mentors = [
        MentorResponse(name=m.name, role=m.role, image=m.image, default=m.default)
        for m in list_mentors()
    ]
    return MentorListResponse(mentors=mentors, count=len(mentors))


@router.post(
    "/sessions",
    response_model=ActionResponse,
    response_model_exclude_none=True,
)
async def create_session(
    data: SessionBookingRequest,
    user: UserRecord = Depends(get_current_user),
) -> ActionResponse:
    """Book a mentorship session for the authenticated user."""
    try:
        validate_session_slot(data.date, data.time)
    except InvalidSlotError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    book_session(user.id, data.mentor_name, data.date, data.time)
    return ActionResponse(success=True)


@router.get("/sessions", response_model=list[SessionBookingResponse])
async def get_sessions(
    user: UserRecord = Depends(get_current_user),
) -> list[SessionBookingResponse]:
    """The authenticated user's booked sessions."""
    return [
        SessionBookingResponse(
            id=s.id,
            mentor_name=s.mentor_name,
            date=s.date,
            time=s.time,
        )
        for s in list_sessions(user.id)
    ]


@router.post(
    "/feedback",
    response_model=ActionResponse,
    response_model_exclude_none=True,
)
async def submit_feedback(
    data: FeedbackRequest,
    user: UserRecord = Depends(get_current_user),
) -> ActionResponse:
    """Store free-text feedback."""
    content = data.content.strip()
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Feedback cannot be empty",
        )

    add_feedback(user.id, content)
    return ActionResponse(success=True)
