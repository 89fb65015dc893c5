"""Configuration settings for script and voice generation."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# API Keys
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
ELEVENLABS_API_KEY = os.environ.get("ELEVENLABS_API_KEY", "")

# Script model (Gemini via LangChain)
SCRIPT_MODEL = os.environ.get("GEMINI_AI_MODEL", "gemini-2.5-flash")
SCRIPT_TEMPERATURE = float(os.environ.get("SCRIPT_TEMPERATURE", "0.7"))
SCRIPT_MAX_OUTPUT_TOKENS = int(os.environ.get("SCRIPT_MAX_OUTPUT_TOKENS", "2000"))
SCRIPT_TIMEOUT_SEC = float(os.environ.get("SCRIPT_TIMEOUT_SEC", "60"))

# Voice synthesis (ElevenLabs)
ELEVENLABS_BASE_URL = os.environ.get("ELEVENLABS_BASE_URL", "https://api.elevenlabs.io")
PREVIEW_TTS_MODEL = "eleven_turbo_v2_5"
HQ_TTS_MODEL = "eleven_multilingual_v2"
TTS_TIMEOUT_SEC = float(os.environ.get("TTS_TIMEOUT_SEC", "120"))
TTS_OUTPUT_FORMAT = os.environ.get("TTS_OUTPUT_FORMAT", "mp3_44100_128")
DEFAULT_VOICE = os.environ.get("DEFAULT_VOICE", "rachel")

VOICE_SETTINGS = {
    "stability": 0.5,
    "similarity_boost": 0.75,
    "style": 0.5,
    "use_speaker_boost": True,
}


def missing_api_keys() -> list[str]:
    """Return names of provider keys that are not configured."""
    missing = []
    if not GEMINI_API_KEY:
        missing.append("GEMINI_API_KEY")
    if not ELEVENLABS_API_KEY:
        missing.append("ELEVENLABS_API_KEY")
    return missing
