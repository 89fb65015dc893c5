"""Shared fixtures for pitches tests."""

import shutil
import tempfile

from django.test import override_settings

from pitches.generators.services import ScriptResult, SpeechResult

VALID_ANSWERS = {
    "who": "Real estate wholesalers doing 2-10 deals a month",
    "pain": "Matching deals to buyers is slow and manual",
    "currentFix": "Spreadsheets and mass texts to the whole list",
    "whatYouDo": "Instant deal-to-buyer matching with live alerts",
    "howItWorks": "Upload a deal, saved buyer preferences match, buyers get pinged",
    "whyYou": "Built by a former wholesaler who closed 200 deals",
    "theAsk": "Book a 15-minute demo call this week",
    "pitchLength": "60-second",
}

SCRIPT_TEXT = "So look, you're doing a handful of deals a month and buyers go cold. Here's the thing..."


def script_result(text: str = SCRIPT_TEXT) -> ScriptResult:
    return ScriptResult(text=text, model="gemini-test", input_tokens=400, output_tokens=250)


def speech_result(text: str = SCRIPT_TEXT, audio: bytes = b"ID3-fake-mp3") -> SpeechResult:
    return SpeechResult(
        audio=audio,
        model_id="eleven_turbo_v2_5",
        voice_id="21m00Tcm4TlvDq8ikWAM",
        characters=len(text),
    )


class TempMediaMixin:
    """Write uploaded audio into a throwaway MEDIA_ROOT."""

    def setUp(self):
        super().setUp()
        media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, media_root, ignore_errors=True)
        override = override_settings(MEDIA_ROOT=media_root)
        override.enable()
        self.addCleanup(override.disable)
