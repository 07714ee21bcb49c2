"""Contest endpoints: listing, registration, questions, scoring."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from skillup.core.scoring import grade
from skillup.db.contests_repository import (
    ContestRecord,
    get_contest_by_id,
    get_questions,
    list_contests,
    register,
    registered_contest_ids,
)
from skillup.db.users_repository import UserRecord
from skillup.web.deps import get_current_user, get_optional_user
from skillup.web.schemas import (
    ActionResponse,
    AnswersRequest,
    ContestRegisterRequest,
    ContestResponse,
    QuestionResponse,
    ScoreResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/contests", tags=["contests"])


def _require_contest(contest_id: int) -> ContestRecord:
    contest = get_contest_by_id(contest_id)
    if contest is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Contest '{contest_id}' not found",
        )
    return contest


@router.get("", response_model=list[ContestResponse], response_model_exclude_none=True)
async def get_contests(
    user: UserRecord | None = Depends(get_optional_user),
) -> list[ContestResponse]:
    """List contests; with a valid token each carries the caller's registration."""
    registered = registered_contest_ids(user.id) if user else None

    return [
        ContestResponse(
            id=c.id,
            title=c.title,
            date=c.date,
            description=c.description,
            registered=(c.id in registered) if registered is not None else None,
        )
        for c in list_contests()
    ]


@router.post(
    "/register",
    response_model=ActionResponse,
    response_model_exclude_none=True,
)
async def register_for_contest(
    data: ContestRegisterRequest,
    user: UserRecord = Depends(get_current_user),
) -> ActionResponse:
    """Register the authenticated user for a contest."""
    _require_contest(data.contest_id)

    if not register(user.id, data.contest_id):
        return ActionResponse(success=False, message="Already registered")
    return ActionResponse(success=True)


@router.get("/{contest_id}/questions", response_model=list[QuestionResponse])
async def get_contest_questions(contest_id: int) -> list[QuestionResponse]:
    """Questions of a contest in order, options decoded."""
    _require_contest(contest_id)
    return [QuestionResponse(**q.to_dict()) for q in get_questions(contest_id)]


@router.post("/{contest_id}/submit", response_model=ScoreResponse)
async def submit_contest(contest_id: int, data: AnswersRequest) -> ScoreResponse:
    """Score answers (question id -> option index); unanswered count as wrong."""
    _require_contest(contest_id)

    questions = get_questions(contest_id)
    result = grade({q.id: q.correct_option for q in questions}, data.answers)

    logger.info(
        "contests.submitted",
        contest_id=contest_id,
        score=result.score,
        total=result.total,
    )
    return ScoreResponse(
        score=result.score,
        total=result.total,
        percentage=result.percentage,
    )
