"""
Chat endpoint proxying to the configured generative model.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from venue_platform.services.chat_service import ChatError, ask_model

router = APIRouter(prefix="/chat", tags=["Chat"])


class ChatRequest(BaseModel):
    message: str = ""


class ChatReply(BaseModel):
    reply: str


@router.post("/", response_model=ChatReply)
async def chat(data: ChatRequest):
    try:
        reply = await ask_model(data.message)
    except ChatError as e:
        return JSONResponse(status_code=e.status_code, content={"reply": e.reply})
    return ChatReply(reply=reply)
