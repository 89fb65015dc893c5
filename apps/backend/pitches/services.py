"""Services for sales pitch generation (script → preview audio → HQ audio).

Each trigger runs one stage of one record:

    draft ──request_script──▶ script_generating ──▶ script_ready ──request_preview──▶
    preview_generating ──▶ preview_ready ──request_hq──▶ hq_generating ──▶ hq_ready

Any generating status can end in ``failed``; the matching ``retry_*`` call
re-enters the stage that failed (``failed_at_status``).

The persisted ``*_generating`` status is the per-record lock: a stage is
claimed with a conditional UPDATE on the status the caller observed, so two
invocations racing on the same record cannot both make the outbound call.
"""

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.utils import timezone

from .constants import OWNER_LIST_LIMIT
from .generators.config import DEFAULT_VOICE
from .generators.exceptions import (
    AlreadyInProgress,
    InvalidStateTransition,
    NotFound,
    PreconditionFailed,
    UpstreamError,
)
from .generators.prompts import build_prompt, normalize_answers
from .generators.services import VoiceProfile, synthesize_speech, write_script
from .generators.utils.logging import log, log_separator
from .models import PitchGeneration
from .status_config import HQ, PREVIEW, SCRIPT, STAGE_LABELS, STAGE_TRANSITIONS
from .storage import store_audio
from .usage import log_script_usage, log_speech_usage

Status = PitchGeneration.Status

STAGE_PROFILES = {
    PREVIEW: VoiceProfile.PREVIEW,
    HQ: VoiceProfile.HQ,
}

# stage -> (audio file field, character count field)
AUDIO_FIELDS = {
    PREVIEW: ("preview_audio", "preview_char_count"),
    HQ: ("hq_audio", "hq_char_count"),
}


# =============================================================================
# Record persistence
# =============================================================================


def get_record(record_id) -> PitchGeneration:
    """Return the generation record or raise NotFound."""
    try:
        return PitchGeneration.objects.get(pk=record_id)
    except (PitchGeneration.DoesNotExist, ValidationError, ValueError):
        raise NotFound(record_id) from None


def _update_if_status(record_id, expected_status: str, **patch) -> None:
    """Apply ``patch`` only if the record is still in ``expected_status``.

    Single conditional UPDATE (compare-and-set on status).

    Raises:
        PreconditionFailed: The status changed since it was read
    """
    patch["updated_at"] = timezone.now()
    updated = PitchGeneration.objects.filter(
        pk=record_id, status=expected_status
    ).update(**patch)
    if not updated:
        raise PreconditionFailed(record_id, expected_status)


def list_for_owner(owner_id: str, limit: int = OWNER_LIST_LIMIT) -> list[PitchGeneration]:
    """Newest generations of an owner."""
    return list(PitchGeneration.objects.filter(owner_id=owner_id).order_by("-created_at")[:limit])


def list_for_business(business_id: str, limit: int = OWNER_LIST_LIMIT) -> list[PitchGeneration]:
    """Newest generations of a business."""
    return list(
        PitchGeneration.objects.filter(business_id=business_id).order_by("-created_at")[:limit]
    )


# =============================================================================
# Draft management
# =============================================================================


def create_draft(
    answers: dict,
    owner_id: str,
    voice: str = DEFAULT_VOICE,
    business_id: str = "",
) -> PitchGeneration:
    """Create a draft from complete wizard answers.

    Raises:
        IncompleteAnswers: Nothing is persisted
        ValueError: Missing owner
    """
    if not str(owner_id or "").strip():
        raise ValueError("owner_id is required")

    prompt = build_prompt(answers)
    record = PitchGeneration.objects.create(
        owner_id=str(owner_id).strip(),
        business_id=business_id or "",
        answers=normalize_answers(answers),
        prompt=prompt,
        voice=(voice or DEFAULT_VOICE).strip(),
    )
    log(f"Draft created: {record.pk} (owner {record.owner_id})")
    return record


def replace_answers(record_id, answers: dict) -> PitchGeneration:
    """Replace the wizard answers wholesale (draft only)."""
    record = get_record(record_id)
    if record.status != Status.DRAFT:
        raise InvalidStateTransition(record.pk, record.status, "replace_answers")

    prompt = build_prompt(answers)
    _update_if_status(
        record.pk, Status.DRAFT, answers=normalize_answers(answers), prompt=prompt
    )
    return get_record(record.pk)


def clone_as_draft(record_id) -> PitchGeneration:
    """Start a new draft from an existing record's answers.

    Answers are frozen once a script has been requested; editing them means
    starting a new record.
    """
    source = get_record(record_id)
    record = PitchGeneration.objects.create(
        owner_id=source.owner_id,
        business_id=source.business_id,
        answers=dict(source.answers),
        prompt=source.prompt,
        voice=source.voice,
    )
    log(f"Draft {record.pk} cloned from {source.pk}")
    return record


def set_voice(record_id, voice: str) -> PitchGeneration:
    """Change the voice used by the next audio stage."""
    voice = (voice or "").strip()
    if not voice:
        raise ValueError("voice is required")

    record = get_record(record_id)
    if record.is_in_progress:
        raise AlreadyInProgress(record.pk, record.status)
    _update_if_status(record.pk, record.status, voice=voice)
    return get_record(record.pk)


def edit_script(record_id, new_text: str) -> PitchGeneration:
    """Overwrite the generated script (script_ready only).

    Audio is only produced after script_ready, so an edit never leaves
    stale audio behind.
    """
    text = (new_text or "").strip()
    if not text:
        raise ValueError("Script text cannot be empty")

    record = get_record(record_id)
    if record.status != Status.SCRIPT_READY:
        raise InvalidStateTransition(record.pk, record.status, "edit_script")

    _update_if_status(record.pk, Status.SCRIPT_READY, script_text=text)
    log(f"Script edited: {record.pk} ({len(text)} chars)")
    return get_record(record.pk)


# =============================================================================
# Stage transitions
# =============================================================================


def _check_transition(record_id, stage: str, operation: str, retry: bool) -> PitchGeneration:
    """Read the record and validate that ``operation`` may start ``stage``."""
    required, generating, _ = STAGE_TRANSITIONS[stage]
    record = get_record(record_id)

    if record.status == generating:
        raise AlreadyInProgress(record.pk, record.status)

    if retry:
        allowed = record.status == Status.FAILED and record.failed_at_status == generating
    else:
        allowed = record.status == required
    if not allowed:
        raise InvalidStateTransition(record.pk, record.status, operation)
    return record


def _claim_stage(record: PitchGeneration, stage: str, **patch) -> None:
    """Move the record to the stage's generating status before any outbound call."""
    _, generating, _ = STAGE_TRANSITIONS[stage]
    try:
        _update_if_status(
            record.pk,
            record.status,
            status=generating,
            failed_at_status="",
            failure_reason="",
            **patch,
        )
    except PreconditionFailed as e:
        log(f"Lost claim on {record.pk}: {e}", "WARNING")
        raise AlreadyInProgress(record.pk, generating) from e
    log(f"Status: {record.status} → {generating}")


def _complete_stage(record_id, stage: str, **artifacts) -> None:
    _, generating, ready = STAGE_TRANSITIONS[stage]
    _update_if_status(record_id, generating, status=ready, **artifacts)
    log(f"Status: {generating} → {ready}", "SUCCESS")


def _fail_stage(record_id, stage: str, error: Exception) -> None:
    """Mark the stage failed; artifact fields are left untouched."""
    _, generating, _ = STAGE_TRANSITIONS[stage]
    if isinstance(error, UpstreamError):
        reason = error.reason
    else:
        reason = f"{error.__class__.__name__}: {error}"
    _update_if_status(
        record_id,
        generating,
        status=Status.FAILED,
        failed_at_status=generating,
        failure_reason=reason,
    )
    log(f"Status: {generating} → failed ({reason})", "ERROR")


def _record_usage(log_usage, *args, **kwargs) -> None:
    """Write a usage row once the stage outcome is persisted.

    A ledger write error is logged and does not replace the stage result.
    """
    try:
        log_usage(*args, **kwargs)
    except DatabaseError as e:
        log(f"Usage record not saved: {e}", "ERROR")


def _run_script_stage(record_id, operation: str, retry: bool, answers: dict | None = None):
    record = _check_transition(record_id, SCRIPT, operation, retry)

    # IncompleteAnswers is raised here, before anything is written
    prompt = build_prompt(record.answers if answers is None else answers)
    patch = {"prompt": prompt}
    if answers is not None:
        patch["answers"] = normalize_answers(answers)

    _claim_stage(record, SCRIPT, **patch)
    log_separator(f"{STAGE_LABELS[SCRIPT]}: {record.pk}")

    try:
        result = write_script(prompt)
    except Exception as e:
        _fail_stage(record.pk, SCRIPT, e)
        _record_usage(log_script_usage, record, error=e)
        raise

    _complete_stage(record.pk, SCRIPT, script_text=result.text)
    _record_usage(log_script_usage, record, result=result)
    return get_record(record.pk)


def _run_audio_stage(record_id, stage: str, operation: str, retry: bool):
    record = _check_transition(record_id, stage, operation, retry)
    _claim_stage(record, stage)

    # Re-read after claiming so the latest edited script is synthesized
    record = get_record(record.pk)
    profile = STAGE_PROFILES[stage]
    audio_field, count_field = AUDIO_FIELDS[stage]
    text = record.script_text
    log_separator(f"{STAGE_LABELS[stage]}: {record.pk}")

    try:
        speech = synthesize_speech(text, record.voice, profile)
    except Exception as e:
        _fail_stage(record.pk, stage, e)
        _record_usage(log_speech_usage, record, profile, len(text), error=e)
        raise

    try:
        ref = store_audio(record.pk, stage, speech.audio)
    except Exception as e:
        _fail_stage(record.pk, stage, e)
        _record_usage(log_speech_usage, record, profile, len(text), result=speech)
        raise

    _complete_stage(record.pk, stage, **{audio_field: ref, count_field: speech.characters})
    _record_usage(log_speech_usage, record, profile, len(text), result=speech)
    return get_record(record.pk)


# =============================================================================
# Caller-facing triggers
# =============================================================================


def request_script(record_id, answers: dict | None = None) -> PitchGeneration:
    """draft → script_ready (or failed).

    Args:
        record_id: Generation id
        answers: Optional replacement answers, stored with the claim

    Raises:
        NotFound, IncompleteAnswers, InvalidStateTransition, AlreadyInProgress,
        UpstreamTimeout, UpstreamRejected, UpstreamInvalidResponse
    """
    return _run_script_stage(record_id, "request_script", retry=False, answers=answers)


def retry_script(record_id) -> PitchGeneration:
    """failed (script stage) → script_ready (or failed)."""
    return _run_script_stage(record_id, "retry_script", retry=True)


def request_preview(record_id) -> PitchGeneration:
    """script_ready → preview_ready (or failed), fast voice model."""
    return _run_audio_stage(record_id, PREVIEW, "request_preview", retry=False)


def retry_preview(record_id) -> PitchGeneration:
    """failed (preview stage) → preview_ready (or failed)."""
    return _run_audio_stage(record_id, PREVIEW, "retry_preview", retry=True)


def request_hq(record_id) -> PitchGeneration:
    """preview_ready → hq_ready (or failed), high quality voice model."""
    return _run_audio_stage(record_id, HQ, "request_hq", retry=False)


def retry_hq(record_id) -> PitchGeneration:
    """failed (HQ stage) → hq_ready (or failed)."""
    return _run_audio_stage(record_id, HQ, "retry_hq", retry=True)


def request_stage(record_id, stage: str) -> PitchGeneration:
    """Run ``stage``: a retry when the record failed in it, else a request."""
    record = get_record(record_id)
    _, generating, _ = STAGE_TRANSITIONS[stage]
    retry = record.status == Status.FAILED and record.failed_at_status == generating
    if stage == SCRIPT:
        return _run_script_stage(record_id, "retry_script" if retry else "request_script", retry)
    operation = f"{'retry' if retry else 'request'}_{stage}"
    return _run_audio_stage(record_id, stage, operation, retry)
