"""Constants for pitch generation.

Centralizes the wizard definition, voice catalogue, pricing and messages.
"""

# =============================================================================
# Wizard Questions
# =============================================================================

# Answer keys in prompt order
ANSWER_KEYS = [
    "who",
    "pain",
    "currentFix",
    "whatYouDo",
    "howItWorks",
    "whyYou",
    "theAsk",
    "pitchLength",
]

PITCH_LENGTH_CHOICES = [
    ("30-second", "30 seconds"),
    ("60-second", "60 seconds"),
    ("2-minute", "2 minutes"),
]

# (key, section, question, help_text, input_type)
WIZARD_QUESTIONS = [
    ("who", "Target", "WHO do you sell to?", "Job title, industry - be specific", "textarea"),
    ("pain", "Problem", "WHAT frustrates them right now?", "Use their words if you can", "textarea"),
    (
        "currentFix",
        "Problem",
        "WHAT are they currently doing about it - and why does it suck?",
        "The status quo they're stuck with",
        "textarea",
    ),
    (
        "whatYouDo",
        "Solution",
        "WHAT do you do? (One sentence, no jargon)",
        "Keep it simple enough for a 5th grader",
        "textarea",
    ),
    ("howItWorks", "Solution", "HOW does it work? (2-3 steps max)", "The simple process", "textarea"),
    (
        "whyYou",
        "Trust",
        "WHY should they trust you over other options?",
        "Your unique credibility or differentiator",
        "textarea",
    ),
    (
        "theAsk",
        "Action",
        "WHAT do you want them to do after the pitch?",
        "Book a call, try it free, reply, etc.",
        "textarea",
    ),
    (
        "pitchLength",
        "Format",
        "HOW long should the pitch be?",
        "Choose the format that fits your use case",
        "select",
    ),
]

# =============================================================================
# Voice Catalogue (ElevenLabs voice ids)
# =============================================================================

# name -> (voice_id, description)
VOICES: dict[str, tuple[str, str]] = {
    "custom": ("dTqqnmNMKYl0Y5SqbNOz", "Your cloned voice"),
    # Male voices
    "drew": ("29vD33N1CtxCmqQRPOHJ", "Confident, professional"),
    "clyde": ("2EiwWnXFnvU5JabPnv8n", "Deep, authoritative"),
    "paul": ("5Q0t7uMcjvnagumLfvZi", "News anchor style"),
    "dave": ("CYw3kZ02Hs0563khs1Fj", "Casual, friendly"),
    "fin": ("D38z5RcWu1voky8WS1ja", "Confident sales voice"),
    "antoni": ("ErXwobaYiN019PkySvjV", "Well-rounded, clear"),
    "thomas": ("GBv7mTt0atIp3Br8iCZE", "Calm, narrative"),
    "charlie": ("IKne3meq5aSn9XLyUdCD", "Casual, Australian"),
    "george": ("JBFqnCBsd6RMkjVDRZzb", "Warm, British"),
    "liam": ("TX3LPaxmHKxFdv7VOQHJ", "Articulate, American"),
    # Female voices
    "rachel": ("21m00Tcm4TlvDq8ikWAM", "Warm, conversational"),
    "domi": ("AZnzlk1XvdvUeBnXmlld", "Strong, assertive"),
    "sarah": ("EXAVITQu4vr4xnSDxMaL", "Soft, calm"),
    "emily": ("LcfcDJNUP1GQjkzn1xUU", "Calm, American"),
    "elli": ("MF3mGyEYCl7XYWbV9V6O", "Young, American"),
}

# =============================================================================
# Pricing (USD)
# =============================================================================

LLM_INPUT_PRICE_PER_MILLION = 0.30
LLM_OUTPUT_PRICE_PER_MILLION = 2.50

TTS_PREVIEW_PRICE_PER_CHAR = 0.000015  # $0.015 per 1K chars
TTS_HQ_PRICE_PER_CHAR = 0.00003  # $0.030 per 1K chars

# Rough script length per pitch length (characters)
PITCH_LENGTH_CHARS = {
    "30-second": 500,
    "60-second": 1000,
    "2-minute": 2000,
}
DEFAULT_PITCH_CHARS = 1000

# =============================================================================
# Listing / Stats
# =============================================================================

OWNER_LIST_LIMIT = 50
USAGE_STATS_DEFAULT_DAYS = 30
USAGE_RECENT_COUNT = 10

# =============================================================================
# Message Templates
# =============================================================================

# Admin action messages (format with record_id / status / error)
MSG_STAGE_DONE = "Generation {record_id}: {stage} finished ({status})."
MSG_STAGE_FAILED = "Generation {record_id}: {stage} failed - {error}"
MSG_STAGE_REJECTED = "Generation {record_id}: {error}"
MSG_NO_ELIGIBLE_RECORDS = "No selected generation is eligible for this action."

# =============================================================================
# Upstream Error Detection
# =============================================================================

# Keywords in provider error messages that indicate a timeout
TIMEOUT_KEYWORDS = [
    "timeout",
    "timed out",
    "deadline exceeded",
    "deadline_exceeded",
]

# Characters of a provider error body kept in failure reasons
ERROR_BODY_EXCERPT = 300
