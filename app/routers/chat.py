"""Chat API route: streams the assistant's reply as Server-Sent Events."""

import json

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from app.chat_engine import run_chat
from app.dependencies import get_current_user_id
from app.models.project import ChatRequest
from config.settings import LLM_ENABLED

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat")
async def chat_route(body: ChatRequest, user_id: str = Depends(get_current_user_id)):
    """Run one assistant turn, streaming text deltas and tool activity."""
    if not LLM_ENABLED:
        raise HTTPException(status_code=503, detail="Chat assistant is disabled")

    messages = [m.model_dump() for m in body.messages]

    def event_stream():
        for event in run_chat(user_id, messages, body.system_prompt, body.model):
            data = json.dumps(event.to_dict(), ensure_ascii=False)
            yield f"data: {data}\n\n"

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
