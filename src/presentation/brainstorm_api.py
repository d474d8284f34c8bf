"""Brainstorm API: ask the assistant and keep the session."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from Data.store import RecordStore
from presentation.dependencies import get_brainstorm_assistant, get_store
from services import auth_service, brainstorm_service
from services.brainstorm_service import BrainstormAssistant
from services.errors import UpstreamError

router = APIRouter()


class GenerateRequest(BaseModel):
    prompt: str = Field(min_length=1)
    session_type: str = Field(default="idea_generation", alias="sessionType")


@router.post("/generate", status_code=201)
async def generate(
    body: GenerateRequest,
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
    assistant: BrainstormAssistant = Depends(get_brainstorm_assistant),
):
    """Generate a response for the prompt and store it as a session."""
    try:
        return await brainstorm_service.generate_session(
            store, assistant, user_id, body.prompt, body.session_type
        )
    except UpstreamError as e:
        return JSONResponse(
            status_code=500,
            content={"error": "Brainstorm assistant unavailable",
                     "message": e.message},
        )
