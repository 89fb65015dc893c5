"""Audio asset storage backed by Django's default storage."""

import secrets

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from .models import audio_storage_path


def store_audio(generation_id, stage: str, audio: bytes) -> str:
    """Save audio bytes and return the opaque storage reference.

    Every call writes a new file, so a retried stage never overwrites the
    audio of an earlier attempt.
    """
    filename = f"{stage}_{secrets.token_hex(4)}.mp3"
    return default_storage.save(
        audio_storage_path(generation_id, filename), ContentFile(audio)
    )


def open_audio(ref: str) -> bytes:
    """Read stored audio bytes by reference."""
    with default_storage.open(ref, "rb") as f:
        return f.read()


def audio_url(ref: str | None) -> str | None:
    """Public URL of stored audio, or None."""
    return default_storage.url(ref) if ref else None
