"""API services for pitch generation."""

from .script_writer import ScriptResult, write_script
from .voice_client import SpeechResult, VoiceProfile, synthesize_speech

__all__ = [
    "write_script",
    "ScriptResult",
    "synthesize_speech",
    "SpeechResult",
    "VoiceProfile",
]
