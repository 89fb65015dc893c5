"""ElevenLabs API client for pitch audio synthesis."""

from enum import Enum

import requests
from pydantic import BaseModel, ConfigDict

from ...constants import ERROR_BODY_EXCERPT, VOICES
from ..config import (
    ELEVENLABS_API_KEY,
    ELEVENLABS_BASE_URL,
    HQ_TTS_MODEL,
    PREVIEW_TTS_MODEL,
    TTS_OUTPUT_FORMAT,
    TTS_TIMEOUT_SEC,
    VOICE_SETTINGS,
)
from ..exceptions import UpstreamInvalidResponse, UpstreamRejected, UpstreamTimeout
from ..utils.logging import log, log_separator


class VoiceProfile(str, Enum):
    """Voice model tier."""

    PREVIEW = "preview"  # fast, low cost
    HQ = "hq"  # high quality, final


PROFILE_MODELS = {
    VoiceProfile.PREVIEW: PREVIEW_TTS_MODEL,
    VoiceProfile.HQ: HQ_TTS_MODEL,
}


class SpeechResult(BaseModel):
    """Synthesized audio with billing details."""

    model_config = ConfigDict(protected_namespaces=())

    audio: bytes
    model_id: str
    voice_id: str
    characters: int


def resolve_voice_id(voice: str) -> str:
    """Map a catalogue voice name to its provider id; raw ids pass through."""
    entry = VOICES.get(voice.strip().lower())
    return entry[0] if entry else voice.strip()


def synthesize_speech(text: str, voice: str, profile: VoiceProfile) -> SpeechResult:
    """Convert script text to MP3 audio with a single ElevenLabs call.

    Args:
        text: Script to read
        voice: Catalogue voice name or raw ElevenLabs voice id
        profile: PREVIEW (turbo model) or HQ (multilingual model)

    Returns:
        SpeechResult with the audio bytes

    Raises:
        UpstreamTimeout: The call timed out
        UpstreamRejected: Missing key, network error or non-success response
        UpstreamInvalidResponse: Empty or non-audio response body
    """
    profile = VoiceProfile(profile)
    model_id = PROFILE_MODELS[profile]
    voice_id = resolve_voice_id(voice)

    log_separator(f"ElevenLabs TTS request ({profile.value})")
    log(f"Model: {model_id}")
    log(f"Voice: {voice} ({voice_id})")
    log(f"Characters: {len(text)}")

    if not ELEVENLABS_API_KEY:
        raise UpstreamRejected("ELEVENLABS_API_KEY is not configured")

    url = f"{ELEVENLABS_BASE_URL.rstrip('/')}/v1/text-to-speech/{voice_id}"
    payload = {
        "text": text,
        "model_id": model_id,
        "voice_settings": VOICE_SETTINGS,
    }
    headers = {
        "xi-api-key": ELEVENLABS_API_KEY,
        "Content-Type": "application/json",
        "Accept": "audio/mpeg",
    }

    try:
        response = requests.post(
            url,
            params={"output_format": TTS_OUTPUT_FORMAT},
            json=payload,
            headers=headers,
            timeout=TTS_TIMEOUT_SEC,
        )
    except requests.Timeout as e:
        log(f"TTS request timed out: {e}", "ERROR")
        raise UpstreamTimeout(f"ElevenLabs request timed out after {TTS_TIMEOUT_SEC}s") from e
    except requests.RequestException as e:
        log(f"TTS request failed: {e}", "ERROR")
        raise UpstreamRejected(f"ElevenLabs request failed: {e}") from e

    if not response.ok:
        body = response.text[:ERROR_BODY_EXCERPT]
        log(f"TTS request rejected: {response.status_code} {body}", "ERROR")
        raise UpstreamRejected(f"ElevenLabs TTS API error {response.status_code}: {body}")

    content_type = response.headers.get("Content-Type", "")
    if content_type and not content_type.startswith("audio/"):
        raise UpstreamInvalidResponse(f"Unexpected content type: {content_type}")
    if not response.content:
        raise UpstreamInvalidResponse("ElevenLabs returned empty audio")

    log(f"Audio received: {len(response.content)} bytes", "SUCCESS")
    return SpeechResult(
        audio=response.content,
        model_id=model_id,
        voice_id=voice_id,
        characters=len(text),
    )
