"""Route handlers for Web API."""

from skillup.web.routes.health import router as health_router
from skillup.web.routes.auth import router as auth_router
from skillup.web.routes.courses import router as courses_router
from skillup.web.routes.books import router as books_router
from skillup.web.routes.sessions import router as sessions_router
from skillup.web.routes.contests import router as contests_router
from skillup.web.routes.progress import router as progress_router
from skillup.web.routes.assessments import router as assessments_router
from skillup.web.routes.mentor import router as mentor_router
from skillup.web.routes.playground import router as playground_router

__all__ = [
    "health_router",
    "auth_router",
    "courses_router",
    "books_router",
    "sessions_router",
    "contests_router",
    "progress_router",
    "assessments_router",
    "mentor_router",
    "playground_router",
]
