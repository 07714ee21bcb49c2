"""Skill assessment endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from skillup.core.assessments import (
    AssessmentNotFoundError,
    get_category,
    list_tracks,
    submit_assessment,
)
from skillup.db.users_repository import UserRecord, get_user_by_id
from skillup.web.deps import get_current_user
from skillup.web.schemas import (
    AssessmentCategoryResponse,
    AssessmentCategorySummary,
    AssessmentQuestionResponse,
    AssessmentResultResponse,
    AssessmentSubmitRequest,
    AssessmentTrackListResponse,
    AssessmentTrackResponse,
    UserResponse,
)

router = APIRouter(prefix="/api/assessments", tags=["assessments"])


@router.get("", response_model=AssessmentTrackListResponse)
async def get_tracks() -> AssessmentTrackListResponse:
    """List tracks and their categories."""
    tracks = [
        AssessmentTrackResponse(
            id=t.id,
            title=t.title,
            categories=[
                AssessmentCategorySummary(
                    id=c.id,
                    title=c.title,
                    icon=c.icon,
                    question_count=len(c.questions),
                )
                for c in t.categories
            ],
        )
        for t in list_tracks()
    ]
    return AssessmentTrackListResponse(tracks=tracks, count=len(tracks))


@router.get("/{track_id}/{category_id}", response_model=AssessmentCategoryResponse)
async def get_category_questions(track_id: str, category_id: str) -> AssessmentCategoryResponse:
    """Questions of one category, without the answer key."""
    try:
        category = get_category(track_id, category_id)
    except AssessmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return AssessmentCategoryResponse(
        track=track_id,
        id=category.id,
        title=category.title,
        questions=[
            AssessmentQuestionResponse(**q.to_public_dict()) for q in category.questions
        ],
    )


@router.post("/{track_id}/submit", response_model=AssessmentResultResponse)
async def submit(
    track_id: str,
    data: AssessmentSubmitRequest,
    user: UserRecord = Depends(get_current_user),
) -> AssessmentResultResponse:
    """Grade a category test and boost the matching progress counter."""
    try:
        result = submit_assessment(user.id, track_id, data.category, data.answers)
    except AssessmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    updated = get_user_by_id(user.id)
    return AssessmentResultResponse(
        track=result.track,
        category=result.category,
        score=result.score,
        total=result.total,
        percentage=result.percentage,
        boost=result.boost,
        previous_progress=result.previous_progress,
        new_progress=result.new_progress,
        user=UserResponse(**updated.to_public_dict()),
    )
