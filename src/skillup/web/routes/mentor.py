"""AI mentor chat endpoints."""

from fastapi import APIRouter, Depends

from skillup.core.mentor import ask_mentor, greeting
from skillup.db.users_repository import UserRecord
from skillup.web.deps import get_current_user
from skillup.web.schemas import ChatRequest, ChatResponse

router = APIRouter(prefix="/api/mentor", tags=["mentor"])


@router.get("/greeting", response_model=ChatResponse)
async def get_greeting(user: UserRecord = Depends(get_current_user)) -> ChatResponse:
    """Opening message for the chat window."""
    return ChatResponse(text=greeting(user.name, user.department))


# Sync handler: the LLM call blocks, so FastAPI runs it in the threadpool
@router.post("/chat", response_model=ChatResponse)
def chat(
    data: ChatRequest,
    user: UserRecord = Depends(get_current_user),
) -> ChatResponse:
    """Send one message to the AI mentor.

    Always answers 200; when the LLM is unavailable the reply is the
    fallback text and ``fallback`` is set.
    """
    reply = ask_mentor(data.message, user.department)
    return ChatResponse(text=reply.text, fallback=reply.fallback)
