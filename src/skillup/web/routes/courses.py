"""Course catalogue and enrollment endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from skillup.db.catalog_repository import (
    CourseRecord,
    enroll,
    get_course_by_id,
    list_courses,
    list_enrolled_courses,
)
from skillup.db.users_repository import UserRecord
from skillup.web.deps import get_current_user
from skillup.web.schemas import ActionResponse, CourseResponse, EnrollRequest

router = APIRouter(prefix="/api/courses", tags=["courses"])


def _to_response(course: CourseRecord) -> CourseResponse:
    return CourseResponse(**course.to_dict())


@router.get("", response_model=list[CourseResponse])
async def get_courses(department: str | None = None) -> list[CourseResponse]:
    """List courses, optionally for one department."""
    return [_to_response(c) for c in list_courses(department or None)]


@router.get("/enrolled", response_model=list[CourseResponse])
async def get_enrolled_courses(
    user: UserRecord = Depends(get_current_user),
) -> list[CourseResponse]:
    """Courses the authenticated user is enrolled in."""
    return [_to_response(c) for c in list_enrolled_courses(user.id)]


@router.get("/{course_id}", response_model=CourseResponse)
async def get_course(course_id: int) -> CourseResponse:
    """Get a specific course by ID."""
    course = get_course_by_id(course_id)
    if course is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Course '{course_id}' not found",
        )
    return _to_response(course)


@router.post(
    "/enroll",
    response_model=ActionResponse,
    response_model_exclude_none=True,
)
async def enroll_in_course(
    data: EnrollRequest,
    user: UserRecord = Depends(get_current_user),
) -> ActionResponse:
    """Enroll the authenticated user in a course."""
    if get_course_by_id(data.course_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Course '{data.course_id}' not found",
        )

    if not enroll(user.id, data.course_id):
        return ActionResponse(success=False, message="Already enrolled")
    return ActionResponse(success=True)
