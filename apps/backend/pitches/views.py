"""JSON endpoints used by the pitch wizard UI."""

import json

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from . import services
from .constants import PITCH_LENGTH_CHOICES, USAGE_STATS_DEFAULT_DAYS, VOICES, WIZARD_QUESTIONS
from .generators.config import DEFAULT_VOICE
from .generators.exceptions import (
    AlreadyInProgress,
    IncompleteAnswers,
    InvalidStateTransition,
    NotFound,
    PitchGenerationError,
    PreconditionFailed,
    UpstreamError,
    UpstreamTimeout,
)
from .generators.prompts import estimate_cost
from .storage import audio_url
from .usage import get_usage_stats

# exception class -> HTTP status (first match wins)
ERROR_STATUS = [
    (NotFound, 404),
    (IncompleteAnswers, 400),
    (InvalidStateTransition, 409),
    (AlreadyInProgress, 409),
    (PreconditionFailed, 409),
    (UpstreamTimeout, 504),
    (UpstreamError, 502),
]


def serialize_record(record) -> dict:
    return {
        "id": str(record.pk),
        "owner_id": record.owner_id,
        "business_id": record.business_id,
        "answers": record.answers,
        "voice": record.voice,
        "status": record.status,
        "failed_at_status": record.failed_at_status,
        "failure_reason": record.failure_reason,
        "script_text": record.script_text,
        "preview_audio_ref": record.preview_audio_ref,
        "preview_audio_url": audio_url(record.preview_audio_ref),
        "hq_audio_ref": record.hq_audio_ref,
        "hq_audio_url": audio_url(record.hq_audio_ref),
        "created_at": record.created_at.isoformat(),
        "updated_at": record.updated_at.isoformat(),
    }


def error_response(error: Exception) -> JsonResponse:
    if isinstance(error, PitchGenerationError):
        status = next((code for cls, code in ERROR_STATUS if isinstance(error, cls)), 400)
        body = {"error": error.category, "detail": str(error)}
        if isinstance(error, IncompleteAnswers):
            body["missing_keys"] = error.missing_keys
        return JsonResponse(body, status=status)
    return JsonResponse({"error": "BadRequest", "detail": str(error)}, status=400)


def _json_body(request) -> dict:
    """Parsed JSON object body; empty for non-JSON or bodyless requests."""
    if request.content_type != "application/json" or not request.body:
        return {}
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise ValueError("JSON object expected")
    return data


def _answers_from(data: dict):
    answers = data.get("answers")
    if answers is not None and not isinstance(answers, dict):
        raise ValueError("answers must be a JSON object")
    return answers


def _record_call(func, *args):
    """Run a service call and render the record or the error."""
    try:
        record = func(*args)
    except (PitchGenerationError, ValueError) as e:
        return error_response(e)
    return JsonResponse(serialize_record(record))


# =============================================================================
# Wizard metadata
# =============================================================================


@require_GET
def wizard_questions(request):
    questions = [
        {
            "id": key,
            "section": section,
            "question": question,
            "help_text": help_text,
            "type": input_type,
            "required": True,
            "options": (
                [{"value": v, "label": label} for v, label in PITCH_LENGTH_CHOICES]
                if input_type == "select"
                else []
            ),
        }
        for key, section, question, help_text, input_type in WIZARD_QUESTIONS
    ]
    voices = [
        {"value": name, "description": description}
        for name, (_, description) in VOICES.items()
    ]
    return JsonResponse({"questions": questions, "voices": voices})


@require_GET
def cost_estimate(request):
    return JsonResponse(estimate_cost(request.GET.get("pitch_length", "")))


# =============================================================================
# Generations
# =============================================================================


@csrf_exempt
@require_POST
def create_generation(request):
    try:
        data = _json_body(request)
        record = services.create_draft(
            _answers_from(data) or {},
            owner_id=data.get("owner_id", ""),
            voice=data.get("voice") or DEFAULT_VOICE,
            business_id=data.get("business_id", ""),
        )
    except (PitchGenerationError, ValueError) as e:
        return error_response(e)
    return JsonResponse(serialize_record(record), status=201)


@require_GET
def list_generations(request):
    owner_id = request.GET.get("owner_id", "")
    business_id = request.GET.get("business_id", "")
    if owner_id:
        records = services.list_for_owner(owner_id)
    elif business_id:
        records = services.list_for_business(business_id)
    else:
        return error_response(ValueError("owner_id or business_id is required"))
    return JsonResponse({"results": [serialize_record(r) for r in records]})


@require_GET
def generation_detail(request, record_id):
    return _record_call(services.get_record, record_id)


@csrf_exempt
@require_POST
def clone_generation(request, record_id):
    try:
        record = services.clone_as_draft(record_id)
    except PitchGenerationError as e:
        return error_response(e)
    return JsonResponse(serialize_record(record), status=201)


@csrf_exempt
@require_POST
def change_voice(request, record_id):
    try:
        voice = _json_body(request).get("voice", "")
    except ValueError as e:
        return error_response(e)
    return _record_call(services.set_voice, record_id, voice)


@csrf_exempt
@require_POST
def generate_script(request, record_id):
    try:
        answers = _answers_from(_json_body(request))
    except ValueError as e:
        return error_response(e)
    return _record_call(services.request_script, record_id, answers)


@csrf_exempt
@require_POST
def retry_script(request, record_id):
    return _record_call(services.retry_script, record_id)


@csrf_exempt
@require_POST
def edit_script(request, record_id):
    try:
        text = _json_body(request).get("script_text", "")
    except ValueError as e:
        return error_response(e)
    return _record_call(services.edit_script, record_id, text)


@csrf_exempt
@require_POST
def generate_preview(request, record_id):
    return _record_call(services.request_preview, record_id)


@csrf_exempt
@require_POST
def retry_preview(request, record_id):
    return _record_call(services.retry_preview, record_id)


@csrf_exempt
@require_POST
def generate_hq(request, record_id):
    return _record_call(services.request_hq, record_id)


@csrf_exempt
@require_POST
def retry_hq(request, record_id):
    return _record_call(services.retry_hq, record_id)


@require_GET
def usage_stats(request):
    try:
        days = int(request.GET.get("days", USAGE_STATS_DEFAULT_DAYS))
    except ValueError as e:
        return error_response(e)
    return JsonResponse(get_usage_stats(days))
