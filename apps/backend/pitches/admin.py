from django.contrib import admin
from django.contrib.auth.models import Group
from django.shortcuts import redirect
from django.utils.html import format_html, format_html_join
from unfold.admin import ModelAdmin
from unfold.decorators import action

from .constants import (
    MSG_NO_ELIGIBLE_RECORDS,
    MSG_STAGE_DONE,
    MSG_STAGE_FAILED,
    MSG_STAGE_REJECTED,
)
from .generators.exceptions import PitchGenerationError, UpstreamError
from .models import PitchGeneration, UsageRecord
from .services import request_stage
from .status_config import (
    PROGRESS_STEPS,
    STAGE_LABELS,
    get_next_stage,
    get_progress_percent,
    get_status_color,
    get_status_order,
)
from .storage import audio_url

# Group 모델 숨기기 (사용하지 않음)
admin.site.unregister(Group)


def run_next_stage(record: PitchGeneration) -> tuple[str, str]:
    """Run the next stage of a record and return (level, message) for the admin."""
    stage = get_next_stage(record.status, record.failed_at_status)
    if stage is None:
        return "warning", MSG_NO_ELIGIBLE_RECORDS

    label = STAGE_LABELS[stage]
    try:
        updated = request_stage(record.pk, stage)
    except UpstreamError as e:
        return "error", MSG_STAGE_FAILED.format(record_id=record.pk, stage=label, error=e.reason)
    except PitchGenerationError as e:
        return "warning", MSG_STAGE_REJECTED.format(record_id=record.pk, error=e)

    return "success", MSG_STAGE_DONE.format(
        record_id=record.pk, stage=label, status=updated.get_status_display()
    )


# =============================================================================
# PitchGeneration Admin
# =============================================================================


@admin.register(PitchGeneration)
class PitchGenerationAdmin(ModelAdmin):
    list_display = [
        "id",
        "owner_id",
        "target_display",
        "voice",
        "status_badge",
        "progress_bar",
        "updated_at",
    ]
    list_filter = ["status", "voice", "created_at"]
    search_fields = ["owner_id", "business_id", "script_text"]
    list_display_links = ["id", "target_display"]
    readonly_fields = [
        "id",
        "owner_id",
        "status",
        "failed_at_status",
        "failure_reason",
        "progress_steps_display",
        "prompt",
        "preview_audio_player",
        "hq_audio_player",
        "preview_char_count",
        "hq_char_count",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        ("입력", {"fields": ("owner_id", "business_id", "answers", "voice")}),
        ("진행 상황", {"fields": ("progress_steps_display",)}),
        (
            "상태",
            {"fields": ("status", "failed_at_status", "failure_reason"), "classes": ("collapse",)},
        ),
        ("스크립트", {"fields": ("prompt", "script_text")}),
        (
            "오디오",
            {
                "fields": (
                    "preview_audio_player",
                    "preview_char_count",
                    "hq_audio_player",
                    "hq_char_count",
                )
            },
        ),
        ("메타", {"fields": ("id", "created_at", "updated_at"), "classes": ("collapse",)}),
    )

    actions = ["bulk_next_stage_action"]
    actions_detail = ["next_stage_action"]

    def has_add_permission(self, request):
        return False

    @admin.display(description="Target")
    def target_display(self, obj):
        return (obj.answers or {}).get("who", "")[:60] or "-"

    @admin.display(description="Status")
    def status_badge(self, obj):
        return format_html(
            '<span class="{} px-2 py-1 rounded-md text-xs font-medium">{}</span>',
            get_status_color(obj.status),
            obj.get_status_display(),
        )

    @admin.display(description="Progress")
    def progress_bar(self, obj):
        percent = get_progress_percent(obj.status)
        return format_html(
            '<div class="w-24 bg-gray-200 rounded-full h-2">'
            '<div class="bg-primary-600 h-2 rounded-full" style="width: {}%"></div></div>',
            percent,
        )

    @admin.display(description="Progress")
    def progress_steps_display(self, obj):
        current = get_status_order(obj.status)
        rows = []
        for status, label, description in PROGRESS_STEPS:
            order = get_status_order(status)
            mark = "✓" if 0 <= order <= current else "·"
            rows.append((mark, label, description))
        if obj.status == PitchGeneration.Status.FAILED:
            rows.append(("✗", "Failed", obj.failure_reason))
        return format_html_join("", "<div>{} <strong>{}</strong> - {}</div>", rows)

    def _audio_player(self, ref):
        url = audio_url(ref)
        if not url:
            return "-"
        return format_html('<audio controls preload="none" src="{}"></audio>', url)

    @admin.display(description="Preview audio")
    def preview_audio_player(self, obj):
        return self._audio_player(obj.preview_audio_ref)

    @admin.display(description="HQ audio")
    def hq_audio_player(self, obj):
        return self._audio_player(obj.hq_audio_ref)

    @action(description="Run next stage", url_path="next_stage_action")
    def next_stage_action(self, request, object_id):
        record = self.get_object(request, object_id)
        level, message = run_next_stage(record)
        self.message_user(request, message, level=level)
        return redirect(request.META.get("HTTP_REFERER", ".."))

    @action(description="Run next stage for selected")
    def bulk_next_stage_action(self, request, queryset):
        for record in queryset:
            level, message = run_next_stage(record)
            self.message_user(request, message, level=level)


# =============================================================================
# UsageRecord Admin
# =============================================================================


@admin.register(UsageRecord)
class UsageRecordAdmin(ModelAdmin):
    list_display = [
        "id",
        "service",
        "operation",
        "generation",
        "model_name",
        "characters",
        "input_tokens",
        "output_tokens",
        "estimated_cost_cents",
        "success",
        "created_at",
    ]
    list_filter = ["service", "operation", "success", "created_at"]
    search_fields = ["model_name", "voice_id", "error_message"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
