"""Tests for status configuration helpers."""

from django.test import SimpleTestCase

from pitches.models import PitchGeneration
from pitches.status_config import (
    HQ,
    PREVIEW,
    SCRIPT,
    get_failed_stage,
    get_next_stage,
    get_progress_percent,
    get_status_color,
    is_in_progress,
)

Status = PitchGeneration.Status


class StatusConfigTest(SimpleTestCase):
    """Tests for status mappings."""

    def test_progress(self):
        self.assertEqual(get_progress_percent(Status.DRAFT), 0)
        self.assertEqual(get_progress_percent(Status.PREVIEW_READY), 66)
        self.assertEqual(get_progress_percent(Status.HQ_READY), 100)
        self.assertEqual(get_progress_percent(Status.FAILED), 0)

    def test_in_progress(self):
        self.assertTrue(is_in_progress(Status.PREVIEW_GENERATING))
        self.assertFalse(is_in_progress(Status.PREVIEW_READY))
        self.assertFalse(is_in_progress(Status.FAILED))

    def test_every_status_has_color(self):
        for status in Status.values:
            self.assertTrue(get_status_color(status))

    def test_next_stage(self):
        self.assertEqual(get_next_stage(Status.DRAFT), SCRIPT)
        self.assertEqual(get_next_stage(Status.SCRIPT_READY), PREVIEW)
        self.assertEqual(get_next_stage(Status.PREVIEW_READY), HQ)
        self.assertIsNone(get_next_stage(Status.HQ_READY))
        self.assertIsNone(get_next_stage(Status.SCRIPT_GENERATING))

    def test_failed_stage(self):
        self.assertEqual(get_failed_stage(Status.HQ_GENERATING), HQ)
        self.assertEqual(get_next_stage(Status.FAILED, Status.PREVIEW_GENERATING), PREVIEW)
        self.assertIsNone(get_failed_stage(""))
