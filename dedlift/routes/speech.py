"""
Text-to-speech route.
"""
from fastapi import APIRouter, Request
from fastapi.responses import Response

from dedlift.core.errors import UpstreamError, UpstreamFailure
from dedlift.core.limiter import limiter
from dedlift.core.logger import log_request, log_error
from dedlift.models.schemas import ErrorResponse, TextToSpeechRequest
from dedlift.services import speech_service

router = APIRouter(responses={500: {"model": ErrorResponse}})


@router.post("/api/text-to-speech")
@limiter.limit("20/minute")
async def text_to_speech(request: Request, req: TextToSpeechRequest):
    """Read text aloud; answers with MP3 audio."""
    log_request("/api/text-to-speech")

    try:
        audio = await speech_service.synthesize_speech(req.text, req.voiceId, req.modelId)
    except UpstreamError:
        raise
    except Exception as e:
        log_error("Text to speech", e)
        raise UpstreamFailure(f"Failed to generate speech: {e}")

    return Response(content=audio, media_type="audio/mpeg")
