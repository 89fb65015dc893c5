"""AI usage tracking for script and voice provider calls."""

import math
from datetime import timedelta

from django.db.models import Count, Q, Sum
from django.utils import timezone

from .constants import (
    LLM_INPUT_PRICE_PER_MILLION,
    LLM_OUTPUT_PRICE_PER_MILLION,
    TTS_HQ_PRICE_PER_CHAR,
    TTS_PREVIEW_PRICE_PER_CHAR,
    USAGE_RECENT_COUNT,
    USAGE_STATS_DEFAULT_DAYS,
)
from .generators.config import HQ_TTS_MODEL, PREVIEW_TTS_MODEL, SCRIPT_MODEL
from .generators.services.voice_client import VoiceProfile, resolve_voice_id
from .models import UsageRecord

Service = UsageRecord.Service
Operation = UsageRecord.Operation

PROFILE_OPERATIONS = {
    VoiceProfile.PREVIEW: Operation.TTS_PREVIEW,
    VoiceProfile.HQ: Operation.TTS_HQ,
}


def llm_cost_cents(input_tokens: int, output_tokens: int) -> int:
    """Estimated LLM cost in cents (rounded up)."""
    dollars = (input_tokens / 1_000_000) * LLM_INPUT_PRICE_PER_MILLION + (
        output_tokens / 1_000_000
    ) * LLM_OUTPUT_PRICE_PER_MILLION
    return math.ceil(dollars * 100)


def tts_cost_cents(characters: int, profile: VoiceProfile) -> int:
    """Estimated TTS cost in cents (rounded up)."""
    per_char = TTS_HQ_PRICE_PER_CHAR if profile == VoiceProfile.HQ else TTS_PREVIEW_PRICE_PER_CHAR
    return math.ceil(characters * per_char * 100)


def log_script_usage(generation, result=None, error: Exception | None = None) -> UsageRecord:
    """Record one script generation call. Failed calls cost nothing."""
    if result is not None:
        return UsageRecord.objects.create(
            service=Service.GEMINI,
            operation=Operation.SCRIPT_GENERATION,
            generation=generation,
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            estimated_cost_cents=llm_cost_cents(result.input_tokens, result.output_tokens),
            model_name=result.model,
            success=True,
        )
    return UsageRecord.objects.create(
        service=Service.GEMINI,
        operation=Operation.SCRIPT_GENERATION,
        generation=generation,
        model_name=SCRIPT_MODEL,
        success=False,
        error_message=str(error or ""),
    )


def log_speech_usage(
    generation,
    profile: VoiceProfile,
    characters: int,
    result=None,
    error: Exception | None = None,
) -> UsageRecord:
    """Record one TTS call. Failed calls cost nothing."""
    profile = VoiceProfile(profile)
    fields = {
        "service": Service.ELEVENLABS,
        "operation": PROFILE_OPERATIONS[profile],
        "generation": generation,
        "characters": characters,
    }
    if result is not None:
        return UsageRecord.objects.create(
            **fields,
            estimated_cost_cents=tts_cost_cents(characters, profile),
            model_name=result.model_id,
            voice_id=result.voice_id,
            success=True,
        )
    return UsageRecord.objects.create(
        **fields,
        model_name=HQ_TTS_MODEL if profile == VoiceProfile.HQ else PREVIEW_TTS_MODEL,
        voice_id=resolve_voice_id(generation.voice) if generation else "",
        success=False,
        error_message=str(error or ""),
    )


def _dollars(cents: int) -> str:
    return f"{cents / 100:.4f}"


def get_usage_stats(days: int = USAGE_STATS_DEFAULT_DAYS) -> dict:
    """Aggregate provider usage over the last ``days`` days."""
    since = timezone.now() - timedelta(days=days)
    records = UsageRecord.objects.filter(created_at__gte=since)

    totals = records.aggregate(
        cost=Sum("estimated_cost_cents"),
        requests=Count("id"),
        successes=Count("id", filter=Q(success=True)),
    )
    gemini = records.filter(service=Service.GEMINI).aggregate(
        cost=Sum("estimated_cost_cents"),
        requests=Count("id"),
        input_tokens=Sum("input_tokens"),
        output_tokens=Sum("output_tokens"),
    )
    elevenlabs = records.filter(service=Service.ELEVENLABS).aggregate(
        cost=Sum("estimated_cost_cents"),
        requests=Count("id"),
        characters=Sum("characters"),
        previews=Count("id", filter=Q(operation=Operation.TTS_PREVIEW)),
        hqs=Count("id", filter=Q(operation=Operation.TTS_HQ)),
    )

    operation_counts = {
        row["operation"]: row["count"]
        for row in records.values("operation").annotate(count=Count("id")).order_by()
    }

    total_cost = totals["cost"] or 0
    gemini_cost = gemini["cost"] or 0
    elevenlabs_cost = elevenlabs["cost"] or 0
    input_tokens = gemini["input_tokens"] or 0
    output_tokens = gemini["output_tokens"] or 0

    return {
        "period": {"days": days, "since": since.isoformat()},
        "totals": {
            "total_cost_cents": total_cost,
            "total_cost_dollars": _dollars(total_cost),
            "request_count": totals["requests"],
            "success_count": totals["successes"],
            "failure_count": totals["requests"] - totals["successes"],
        },
        "gemini": {
            "cost_cents": gemini_cost,
            "cost_dollars": _dollars(gemini_cost),
            "request_count": gemini["requests"],
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
        },
        "elevenlabs": {
            "cost_cents": elevenlabs_cost,
            "cost_dollars": _dollars(elevenlabs_cost),
            "request_count": elevenlabs["requests"],
            "characters": elevenlabs["characters"] or 0,
            "preview_count": elevenlabs["previews"],
            "hq_count": elevenlabs["hqs"],
        },
        "operation_counts": operation_counts,
        "recent_usage": [
            {
                "service": record.service,
                "operation": record.operation,
                "cost_cents": record.estimated_cost_cents,
                "success": record.success,
                "created_at": record.created_at.isoformat(),
            }
            for record in records.order_by("-created_at")[:USAGE_RECENT_COUNT]
        ],
    }
