from fastapi import APIRouter, Depends
from app.schemas.api_schemas import ChatRequest, ChatTranscript
from app.dependencies import get_chat_service
from app.application.chat_service import ChatService

router = APIRouter()

def _transcript(chat: ChatService) -> ChatTranscript:
    return ChatTranscript(messages=[m.to_dict() for m in chat.transcript()])

@router.get("/chat", response_model=ChatTranscript)
async def get_transcript(chat: ChatService = Depends(get_chat_service)):
    """
    Full chat transcript, oldest first.
    """
    return _transcript(chat)

@router.post("/chat", response_model=ChatTranscript)
async def send_message(
    request: ChatRequest,
    chat: ChatService = Depends(get_chat_service)
):
    """
    Send a message to the deployment assistant and return the transcript.
    """
    await chat.send(request.message)
    return _transcript(chat)
