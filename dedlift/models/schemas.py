"""
Pydantic models for request/response validation.
"""
from pydantic import BaseModel

from dedlift.core.config import settings


# --- Speech Models ---

class TextToSpeechRequest(BaseModel):
    """Request model for speech synthesis."""
    text: str | None = None
    voiceId: str = settings.SPEECH_VOICE
    modelId: str = settings.SPEECH_MODEL


# --- Generic Response Models ---

class ErrorResponse(BaseModel):
    """Error payload returned by every route."""
    error: str
    details: str | None = None
