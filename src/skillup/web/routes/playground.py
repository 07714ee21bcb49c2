"""Coding playground endpoints."""

from fastapi import APIRouter, HTTPException, status

from skillup.core.playground import ProblemNotFoundError, list_problems, run_code
from skillup.web.schemas import (
    ProblemListResponse,
    ProblemResponse,
    RunRequest,
    RunResponse,
)

router = APIRouter(prefix="/api/playground", tags=["playground"])


@router.get("/problems", response_model=ProblemListResponse)
async def get_problems() -> ProblemListResponse:
    """List practice problems."""
    problems = [
        ProblemResponse(index=i, **p.to_dict()) for i, p in enumerate(list_problems())
    ]
    return ProblemListResponse(problems=problems, count=len(problems))


@router.post("/run", response_model=RunResponse)
async def run(data: RunRequest) -> RunResponse:
    """Mock-run a solution against a problem."""
    try:
        report = run_code(data.problem_index, data.code)
    except ProblemNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return RunResponse(
        problem=report.problem,
        success=report.success,
        passed=report.passed,
        total=report.total,
        runtime_ms=report.runtime_ms,
        output=report.output,
    )
