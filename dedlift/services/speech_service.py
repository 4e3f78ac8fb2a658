"""
Speech synthesis through the OpenAI audio API.
"""
import openai
from openai import AsyncOpenAI

from dedlift.core.config import settings
from dedlift.core.errors import (
    ConfigurationError,
    MissingParameterError,
    UpstreamAuthError,
    UpstreamFailure,
    UpstreamQuotaError,
)
from dedlift.core.logger import logger, log_upstream_call, log_error


# No automatic retries: the only second attempt is the fallback model below.
client = AsyncOpenAI(
    api_key=settings.OPENAI_API_KEY,
    max_retries=0,
    timeout=settings.SPEECH_TIMEOUT,
)


def _is_model_error(error: openai.APIStatusError) -> bool:
    message = str(error).lower()
    return "model" in message or "deprecated" in message


async def _stream_speech(text: str, voice: str, model: str) -> bytes:
    """Collect the streamed audio of one synthesis call."""
    log_upstream_call("OpenAI", f"/audio/speech ({model})")

    async with client.audio.speech.with_streaming_response.create(
        model=model,
        voice=voice,
        input=text,
        response_format="mp3",
    ) as response:
        chunks = [chunk async for chunk in response.iter_bytes()]

    return b"".join(chunks)


async def synthesize_speech(
    text: str | None,
    voice: str | None = None,
    model: str | None = None,
) -> bytes:
    """
    Turn text into MP3 audio.

    When the primary model is rejected (unknown or deprecated), the
    fallback model is tried exactly once.

    Args:
        text: Text to read aloud
        voice: Voice identifier, defaults to settings.SPEECH_VOICE
        model: Model identifier, defaults to settings.SPEECH_MODEL

    Returns:
        MP3 audio bytes

    Raises:
        MissingParameterError: If text is blank
        ConfigurationError: If no API key is configured
        UpstreamAuthError: If the key is rejected
        UpstreamQuotaError: If the account is rate limited
        UpstreamFailure: For anything else
    """
    if not isinstance(text, str) or not text.strip():
        raise MissingParameterError("Text is required")
    if not settings.OPENAI_API_KEY:
        raise ConfigurationError("Speech API key not configured")

    voice = voice or settings.SPEECH_VOICE
    model = model or settings.SPEECH_MODEL

    try:
        return await _stream_speech(text, voice, model)
    except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
        log_error("Speech synthesis", e)
        raise UpstreamAuthError(
            "Invalid API key. Please check your speech API key.", status_code=401
        )
    except openai.RateLimitError as e:
        log_error("Speech synthesis", e)
        raise UpstreamQuotaError("Too many requests. Please wait a moment and try again.")
    except openai.APIStatusError as e:
        log_error("Speech synthesis", e)
        if not _is_model_error(e) or model == settings.SPEECH_FALLBACK_MODEL:
            raise UpstreamFailure(f"Failed to generate speech: {e.message}")
        primary_error = e
    except openai.APIConnectionError as e:
        log_error("Speech synthesis", e)
        raise UpstreamFailure(f"Failed to generate speech: {e}")

    logger.warning(f"Model {model} rejected, trying fallback model {settings.SPEECH_FALLBACK_MODEL}")
    try:
        return await _stream_speech(text, voice, settings.SPEECH_FALLBACK_MODEL)
    except openai.OpenAIError as e:
        log_error("Speech synthesis fallback", e)
        raise UpstreamFailure(f"Failed to generate speech: {primary_error.message}")
