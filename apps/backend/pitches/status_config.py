"""Status configuration for the pitch generation workflow.

Centralizes all status-related mappings to avoid duplication across modules.
"""

from .models import PitchGeneration

# Type alias for convenience
Status = PitchGeneration.Status

# =============================================================================
# Stages
# =============================================================================

SCRIPT = "script"
PREVIEW = "preview"
HQ = "hq"

STAGE_LABELS: dict[str, str] = {
    SCRIPT: "Script",
    PREVIEW: "Preview audio",
    HQ: "HQ audio",
}

# =============================================================================
# Stage Transitions
# =============================================================================

# stage -> (required status, generating status, ready status)
STAGE_TRANSITIONS: dict[str, tuple[str, str, str]] = {
    SCRIPT: (Status.DRAFT, Status.SCRIPT_GENERATING, Status.SCRIPT_READY),
    PREVIEW: (Status.SCRIPT_READY, Status.PREVIEW_GENERATING, Status.PREVIEW_READY),
    HQ: (Status.PREVIEW_READY, Status.HQ_GENERATING, Status.HQ_READY),
}

# generating status -> stage (used to pick the retry after a failure)
GENERATING_TO_STAGE: dict[str, str] = {
    generating: stage for stage, (_, generating, _) in STAGE_TRANSITIONS.items()
}

# =============================================================================
# Status Order (for progress calculation)
# =============================================================================

# Total steps for progress calculation (6 steps after draft)
TOTAL_STEPS = 6

STATUS_ORDER: dict[str, int] = {
    Status.DRAFT: 0,
    Status.SCRIPT_GENERATING: 1,
    Status.SCRIPT_READY: 2,
    Status.PREVIEW_GENERATING: 3,
    Status.PREVIEW_READY: 4,
    Status.HQ_GENERATING: 5,
    Status.HQ_READY: 6,
    Status.FAILED: -1,  # Special case
}

PROGRESS_PERCENTAGES: dict[str, int] = {
    status: int((order / TOTAL_STEPS) * 100)
    for status, order in STATUS_ORDER.items()
    if order >= 0  # Exclude FAILED
}
PROGRESS_PERCENTAGES[Status.FAILED] = 0  # Failed shows 0%

# =============================================================================
# Status Colors (Tailwind CSS classes)
# =============================================================================

STATUS_COLORS: dict[str, str] = {
    Status.DRAFT: "bg-gray-100 text-gray-700",
    Status.SCRIPT_GENERATING: "bg-yellow-100 text-yellow-700",
    Status.SCRIPT_READY: "bg-blue-100 text-blue-700",
    Status.PREVIEW_GENERATING: "bg-yellow-100 text-yellow-700",
    Status.PREVIEW_READY: "bg-blue-100 text-blue-700",
    Status.HQ_GENERATING: "bg-yellow-100 text-yellow-700",
    Status.HQ_READY: "bg-green-100 text-green-700",
    Status.FAILED: "bg-red-100 text-red-700",
}

# =============================================================================
# In-Progress Statuses (for UI logic)
# =============================================================================

IN_PROGRESS_STATUSES = [
    Status.SCRIPT_GENERATING,
    Status.PREVIEW_GENERATING,
    Status.HQ_GENERATING,
]

# =============================================================================
# Progress Steps for Detail View
# =============================================================================

# (status_key, label, description)
PROGRESS_STEPS = [
    ("draft", "Draft", "Wizard answers saved"),
    ("script_generating", "Script", "Gemini is writing the pitch script"),
    ("script_ready", "Review", "Script ready to review and edit"),
    ("preview_generating", "Preview", "ElevenLabs turbo voice is reading the script"),
    ("preview_ready", "Listen", "Preview audio ready"),
    ("hq_generating", "HQ", "ElevenLabs multilingual voice is recording the final audio"),
    ("hq_ready", "Done", "HQ audio ready to download"),
]


# =============================================================================
# Helper Functions
# =============================================================================


def get_status_color(status: str) -> str:
    """Get Tailwind CSS color class for a status."""
    return STATUS_COLORS.get(status, "bg-gray-100 text-gray-700")


def get_progress_percent(status: str) -> int:
    """Get progress percentage for a status."""
    return PROGRESS_PERCENTAGES.get(status, 0)


def get_status_order(status: str) -> int:
    """Get the order number for a status."""
    return STATUS_ORDER.get(status, 0)


def is_in_progress(status: str) -> bool:
    """Check if a status indicates a stage is generating."""
    return status in IN_PROGRESS_STATUSES


def get_failed_stage(failed_at_status: str) -> str | None:
    """Get the stage a failed record can retry, or None."""
    return GENERATING_TO_STAGE.get(failed_at_status)


def get_next_stage(status: str, failed_at_status: str = "") -> str | None:
    """Get the stage the user can trigger next from a status."""
    if status == Status.FAILED:
        return get_failed_stage(failed_at_status)
    for stage, (required, _, _) in STAGE_TRANSITIONS.items():
        if required == status:
            return stage
    return None
