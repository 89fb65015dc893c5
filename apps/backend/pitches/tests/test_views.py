"""Tests for the pitch JSON endpoints."""

import uuid
from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse

from pitches import services
from pitches.admin import run_next_stage
from pitches.generators.exceptions import UpstreamRejected, UpstreamTimeout
from pitches.models import PitchGeneration
from pitches.tests.helpers import VALID_ANSWERS, TempMediaMixin, script_result, speech_result

Status = PitchGeneration.Status


class WizardViewsTest(TestCase):
    """Tests for wizard metadata endpoints."""

    def test_questions(self):
        response = self.client.get(reverse("pitches:questions"))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(len(data["questions"]), 8)
        self.assertEqual(data["questions"][-1]["id"], "pitchLength")
        self.assertTrue(data["questions"][-1]["options"])
        self.assertIn("rachel", [v["value"] for v in data["voices"]])

    def test_estimate(self):
        response = self.client.get(reverse("pitches:estimate"), {"pitch_length": "2-minute"})

        self.assertEqual(response.json()["chars"], 2000)


class GenerationViewsTest(TempMediaMixin, TestCase):
    """Tests for generation endpoints."""

    def create(self, **overrides):
        payload = {"answers": VALID_ANSWERS, "owner_id": "user-1", **overrides}
        return self.client.post(
            reverse("pitches:create"), payload, content_type="application/json"
        )

    def test_create(self):
        response = self.create(voice="drew")

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data["status"], "draft")
        self.assertEqual(data["voice"], "drew")
        self.assertIsNone(data["preview_audio_url"])

    def test_create_incomplete(self):
        answers = {k: v for k, v in VALID_ANSWERS.items() if k != "theAsk"}

        response = self.create(answers=answers)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "IncompleteAnswers")
        self.assertEqual(response.json()["missing_keys"], ["theAsk"])
        self.assertEqual(PitchGeneration.objects.count(), 0)

    def test_detail_not_found(self):
        url = reverse("pitches:detail", args=[uuid.uuid4()])

        response = self.client.get(url)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "NotFound")

    def test_list_requires_owner(self):
        self.assertEqual(self.client.get(reverse("pitches:list")).status_code, 400)

    def test_list(self):
        self.create()
        self.create(owner_id="someone-else")

        response = self.client.get(reverse("pitches:list"), {"owner_id": "user-1"})

        self.assertEqual(len(response.json()["results"]), 1)

    @patch("pitches.services.synthesize_speech")
    @patch("pitches.services.write_script")
    def test_stage_endpoints(self, mock_write, mock_speech):
        mock_write.return_value = script_result()
        mock_speech.return_value = speech_result()
        record_id = self.create().json()["id"]

        response = self.client.post(reverse("pitches:script", args=[record_id]))
        self.assertEqual(response.json()["status"], "script_ready")

        response = self.client.post(
            reverse("pitches:edit_script", args=[record_id]),
            {"script_text": "Short edited pitch."},
            content_type="application/json",
        )
        self.assertEqual(response.json()["script_text"], "Short edited pitch.")

        response = self.client.post(reverse("pitches:preview", args=[record_id]))
        self.assertEqual(response.json()["status"], "preview_ready")
        self.assertTrue(response.json()["preview_audio_url"])

        response = self.client.post(reverse("pitches:hq", args=[record_id]))
        self.assertEqual(response.json()["status"], "hq_ready")
        self.assertTrue(response.json()["hq_audio_ref"])

    def test_invalid_transition_is_conflict(self):
        record_id = self.create().json()["id"]

        response = self.client.post(reverse("pitches:preview", args=[record_id]))

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "InvalidStateTransition")

    def test_get_not_allowed(self):
        record_id = self.create().json()["id"]

        response = self.client.get(reverse("pitches:script", args=[record_id]))

        self.assertEqual(response.status_code, 405)

    @patch("pitches.services.write_script")
    def test_upstream_errors(self, mock_write):
        record_id = self.create().json()["id"]

        mock_write.side_effect = UpstreamTimeout("deadline exceeded")
        response = self.client.post(reverse("pitches:script", args=[record_id]))
        self.assertEqual(response.status_code, 504)

        mock_write.side_effect = UpstreamRejected("400 API key not valid")
        response = self.client.post(reverse("pitches:retry_script", args=[record_id]))
        self.assertEqual(response.status_code, 502)

        detail = self.client.get(reverse("pitches:detail", args=[record_id])).json()
        self.assertEqual(detail["status"], "failed")
        self.assertEqual(detail["failed_at_status"], "script_generating")
        self.assertIn("UpstreamRejected", detail["failure_reason"])

    @patch("pitches.services.write_script")
    def test_script_request_without_json_body(self, mock_write):
        mock_write.return_value = script_result()
        first_id = self.create().json()["id"]
        second_id = self.create().json()["id"]

        response = self.client.post(reverse("pitches:script", args=[first_id]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "script_ready")

        response = self.client.post(
            reverse("pitches:script", args=[second_id]), {"note": "form data"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "script_ready")

    def test_malformed_json_body(self):
        record_id = self.create().json()["id"]

        response = self.client.post(
            reverse("pitches:script", args=[record_id]), "{not json", content_type="application/json"
        )

        self.assertEqual(response.status_code, 400)

    def test_answers_must_be_object(self):
        response = self.create(answers="abc")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "BadRequest")
        self.assertEqual(PitchGeneration.objects.count(), 0)

        record_id = self.create().json()["id"]
        response = self.client.post(
            reverse("pitches:script", args=[record_id]),
            {"answers": ["who"]},
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 400)

    def test_list_by_business(self):
        self.create(business_id="biz-1")
        self.create(business_id="biz-2")

        response = self.client.get(reverse("pitches:list"), {"business_id": "biz-1"})

        results = response.json()["results"]
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]["business_id"], "biz-1")

    def test_clone_and_voice(self):
        record_id = self.create().json()["id"]

        response = self.client.post(reverse("pitches:clone", args=[record_id]))
        self.assertEqual(response.status_code, 201)
        clone_id = response.json()["id"]
        self.assertNotEqual(clone_id, record_id)

        response = self.client.post(
            reverse("pitches:voice", args=[clone_id]),
            {"voice": "josh"},
            content_type="application/json",
        )
        self.assertEqual(response.json()["voice"], "josh")

        response = self.client.post(
            reverse("pitches:voice", args=[clone_id]), {}, content_type="application/json"
        )
        self.assertEqual(response.status_code, 400)

    def test_usage(self):
        response = self.client.get(reverse("pitches:usage"), {"days": "7"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["period"]["days"], 7)


class RunNextStageTest(TestCase):
    """Tests for the admin next-stage action helper."""

    @patch("pitches.services.write_script")
    def test_runs_script_stage(self, mock_write):
        mock_write.return_value = script_result()
        record = services.create_draft(dict(VALID_ANSWERS), owner_id="user-1")

        level, message = run_next_stage(record)

        self.assertEqual(level, "success")
        self.assertEqual(services.get_record(record.pk).status, Status.SCRIPT_READY)
        self.assertIn(str(record.pk), message)

    @patch("pitches.services.write_script")
    def test_reports_failure(self, mock_write):
        mock_write.side_effect = UpstreamTimeout("deadline exceeded")
        record = services.create_draft(dict(VALID_ANSWERS), owner_id="user-1")

        level, message = run_next_stage(record)

        self.assertEqual(level, "error")
        self.assertIn("UpstreamTimeout", message)

    def test_nothing_to_run(self):
        record = services.create_draft(dict(VALID_ANSWERS), owner_id="user-1")
        PitchGeneration.objects.filter(pk=record.pk).update(status=Status.HQ_READY)
        record.refresh_from_db()

        level, _ = run_next_stage(record)

        self.assertEqual(level, "warning")
