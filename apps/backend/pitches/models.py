import uuid

from django.db import models

from .generators.config import DEFAULT_VOICE


# =============================================================================
# Upload path helpers (generation id별 폴더 구조)
# =============================================================================


def audio_storage_path(generation_id, filename):
    """Pitch audio path: pitches/{generation_id}/{filename}"""
    return f"pitches/{generation_id}/{filename}"


def generation_audio_path(instance, filename):
    return audio_storage_path(instance.id, filename)


# =============================================================================
# Models
# =============================================================================


class PitchGeneration(models.Model):
    """One sales pitch generation attempt (wizard answers → script → audio)."""

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        SCRIPT_GENERATING = "script_generating", "Writing script"
        SCRIPT_READY = "script_ready", "Script ready"
        PREVIEW_GENERATING = "preview_generating", "Generating preview"
        PREVIEW_READY = "preview_ready", "Preview ready"
        HQ_GENERATING = "hq_generating", "Generating HQ audio"
        HQ_READY = "hq_ready", "HQ audio ready"
        FAILED = "failed", "Failed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # 소유자
    owner_id = models.CharField("Owner", max_length=100, db_index=True, editable=False)
    business_id = models.CharField("Business", max_length=100, blank=True, db_index=True)

    # 입력
    answers = models.JSONField("Wizard answers", default=dict)
    prompt = models.TextField("Prompt", blank=True)
    voice = models.CharField(
        "Voice",
        max_length=64,
        default=DEFAULT_VOICE,
        help_text="Catalogue voice name or raw ElevenLabs voice id",
    )

    # 상태
    status = models.CharField(
        "Status", max_length=20, choices=Status.choices, default=Status.DRAFT
    )
    failed_at_status = models.CharField(
        "Failed at status",
        max_length=20,
        blank=True,
        help_text="Generating status the failure happened in (selects the retry)",
    )
    failure_reason = models.TextField("Failure reason", blank=True)

    # 결과
    script_text = models.TextField("Script", blank=True)
    preview_audio = models.FileField(
        "Preview audio", upload_to=generation_audio_path, blank=True, max_length=255
    )
    preview_char_count = models.PositiveIntegerField("Preview characters", default=0)
    hq_audio = models.FileField(
        "HQ audio", upload_to=generation_audio_path, blank=True, max_length=255
    )
    hq_char_count = models.PositiveIntegerField("HQ characters", default=0)

    # 메타
    created_at = models.DateTimeField("Created", auto_now_add=True)
    updated_at = models.DateTimeField("Updated", auto_now=True)

    class Meta:
        verbose_name = "Pitch generation"
        verbose_name_plural = "Pitch generations"
        ordering = ["-created_at"]

    def __str__(self):
        who = (self.answers or {}).get("who", "")
        return f"[{self.get_status_display()}] {who[:40] or self.id}"

    @property
    def is_in_progress(self) -> bool:
        return self.status in (
            self.Status.SCRIPT_GENERATING,
            self.Status.PREVIEW_GENERATING,
            self.Status.HQ_GENERATING,
        )

    @property
    def preview_audio_ref(self) -> str | None:
        """Opaque storage reference of the preview audio."""
        return self.preview_audio.name or None

    @property
    def hq_audio_ref(self) -> str | None:
        """Opaque storage reference of the HQ audio."""
        return self.hq_audio.name or None


class UsageRecord(models.Model):
    """AI provider usage log (one row per outbound call)."""

    class Service(models.TextChoices):
        GEMINI = "gemini", "Gemini"
        ELEVENLABS = "elevenlabs", "ElevenLabs"

    class Operation(models.TextChoices):
        SCRIPT_GENERATION = "script_generation", "Script generation"
        TTS_PREVIEW = "tts_preview", "Preview audio"
        TTS_HQ = "tts_hq", "HQ audio"

    service = models.CharField("Service", max_length=20, choices=Service.choices)
    operation = models.CharField("Operation", max_length=30, choices=Operation.choices)
    generation = models.ForeignKey(
        PitchGeneration,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="usage_records",
        verbose_name="Generation",
    )

    # 사용량
    input_tokens = models.PositiveIntegerField("Input tokens", default=0)
    output_tokens = models.PositiveIntegerField("Output tokens", default=0)
    characters = models.PositiveIntegerField("Characters", default=0)
    estimated_cost_cents = models.PositiveIntegerField("Estimated cost (cents)", default=0)

    model_name = models.CharField("Model", max_length=100, blank=True)
    voice_id = models.CharField("Voice id", max_length=64, blank=True)
    success = models.BooleanField("Success", default=True)
    error_message = models.TextField("Error", blank=True)

    # 메타
    created_at = models.DateTimeField("Created", auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = "AI usage"
        verbose_name_plural = "AI usage"
        ordering = ["-created_at"]

    def __str__(self):
        outcome = "ok" if self.success else "failed"
        return f"{self.service}/{self.operation} ({outcome})"
