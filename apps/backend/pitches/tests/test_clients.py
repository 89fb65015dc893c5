"""Tests for the Gemini script writer and ElevenLabs voice client."""

from unittest.mock import MagicMock, patch

import requests
from django.test import SimpleTestCase
from langchain_core.messages import AIMessage

from pitches.generators.exceptions import (
    UpstreamInvalidResponse,
    UpstreamRejected,
    UpstreamTimeout,
)
from pitches.generators.services import script_writer, voice_client
from pitches.generators.services.voice_client import (
    VoiceProfile,
    resolve_voice_id,
    synthesize_speech,
)


@patch("pitches.generators.services.script_writer.get_script_llm")
class WriteScriptTest(SimpleTestCase):
    """Tests for write_script function."""

    def test_returns_text_and_usage(self, mock_get_llm):
        mock_get_llm.return_value.invoke.return_value = AIMessage(
            content="  So look, here's the thing.  ",
            usage_metadata={"input_tokens": 120, "output_tokens": 80, "total_tokens": 200},
        )

        result = script_writer.write_script("prompt text")

        self.assertEqual(result.text, "So look, here's the thing.")
        self.assertEqual(result.input_tokens, 120)
        self.assertEqual(result.output_tokens, 80)
        messages = mock_get_llm.return_value.invoke.call_args.args[0]
        self.assertEqual(messages[-1].content, "prompt text")
        mock_get_llm.return_value.invoke.assert_called_once()

    def test_content_parts(self, mock_get_llm):
        mock_get_llm.return_value.invoke.return_value = AIMessage(
            content=[{"type": "text", "text": "Hey there, "}, "quick question."]
        )

        result = script_writer.write_script("prompt")

        self.assertEqual(result.text, "Hey there, quick question.")
        self.assertEqual(result.input_tokens, 0)

    def test_empty_script(self, mock_get_llm):
        mock_get_llm.return_value.invoke.return_value = AIMessage(content="   ")

        with self.assertRaises(UpstreamInvalidResponse):
            script_writer.write_script("prompt")

    def test_timeout(self, mock_get_llm):
        mock_get_llm.return_value.invoke.side_effect = TimeoutError()

        with self.assertRaises(UpstreamTimeout):
            script_writer.write_script("prompt")

    def test_deadline_message_is_timeout(self, mock_get_llm):
        mock_get_llm.return_value.invoke.side_effect = Exception("504 Deadline Exceeded")

        with self.assertRaises(UpstreamTimeout):
            script_writer.write_script("prompt")

    def test_rejected(self, mock_get_llm):
        mock_get_llm.return_value.invoke.side_effect = Exception("400 API key not valid")

        with self.assertRaises(UpstreamRejected) as ctx:
            script_writer.write_script("prompt")
        self.assertIn("UpstreamRejected", ctx.exception.reason)


class GetScriptLlmTest(SimpleTestCase):
    """Tests for get_script_llm function."""

    @patch.object(script_writer, "_llm", None)
    @patch.object(script_writer, "GEMINI_API_KEY", "")
    def test_missing_key(self):
        with self.assertRaises(UpstreamRejected):
            script_writer.get_script_llm()


def audio_response(content=b"ID3audio", status_code=200, content_type="audio/mpeg", text=""):
    response = MagicMock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.headers = {"Content-Type": content_type}
    response.content = content
    response.text = text
    return response


@patch.object(voice_client, "ELEVENLABS_API_KEY", "test-key")
@patch("pitches.generators.services.voice_client.requests.post")
class SynthesizeSpeechTest(SimpleTestCase):
    """Tests for synthesize_speech function."""

    def test_preview_request(self, mock_post):
        mock_post.return_value = audio_response()

        result = synthesize_speech("Hello there.", "rachel", VoiceProfile.PREVIEW)

        self.assertEqual(result.audio, b"ID3audio")
        self.assertEqual(result.model_id, "eleven_turbo_v2_5")
        self.assertEqual(result.voice_id, "21m00Tcm4TlvDq8ikWAM")
        self.assertEqual(result.characters, 12)

        url = mock_post.call_args.args[0]
        kwargs = mock_post.call_args.kwargs
        self.assertTrue(url.endswith("/v1/text-to-speech/21m00Tcm4TlvDq8ikWAM"))
        self.assertEqual(kwargs["json"]["text"], "Hello there.")
        self.assertEqual(kwargs["headers"]["xi-api-key"], "test-key")
        self.assertIn("timeout", kwargs)
        mock_post.assert_called_once()

    def test_hq_uses_multilingual_model(self, mock_post):
        mock_post.return_value = audio_response()

        result = synthesize_speech("Hello.", "rachel", "hq")

        self.assertEqual(result.model_id, "eleven_multilingual_v2")
        self.assertEqual(mock_post.call_args.kwargs["json"]["model_id"], "eleven_multilingual_v2")

    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.Timeout("read timed out")

        with self.assertRaises(UpstreamTimeout):
            synthesize_speech("Hello.", "rachel", VoiceProfile.PREVIEW)

    def test_connection_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("connection refused")

        with self.assertRaises(UpstreamRejected):
            synthesize_speech("Hello.", "rachel", VoiceProfile.PREVIEW)

    def test_error_status(self, mock_post):
        mock_post.return_value = audio_response(
            status_code=401, content_type="application/json", text='{"detail": "invalid key"}'
        )

        with self.assertRaises(UpstreamRejected) as ctx:
            synthesize_speech("Hello.", "rachel", VoiceProfile.PREVIEW)
        self.assertIn("401", str(ctx.exception))

    def test_empty_audio(self, mock_post):
        mock_post.return_value = audio_response(content=b"")

        with self.assertRaises(UpstreamInvalidResponse):
            synthesize_speech("Hello.", "rachel", VoiceProfile.HQ)

    def test_non_audio_body(self, mock_post):
        mock_post.return_value = audio_response(content=b"{}", content_type="application/json")

        with self.assertRaises(UpstreamInvalidResponse):
            synthesize_speech("Hello.", "rachel", VoiceProfile.HQ)

    def test_missing_key(self, mock_post):
        with patch.object(voice_client, "ELEVENLABS_API_KEY", ""):
            with self.assertRaises(UpstreamRejected):
                synthesize_speech("Hello.", "rachel", VoiceProfile.PREVIEW)
        mock_post.assert_not_called()


class ResolveVoiceIdTest(SimpleTestCase):
    """Tests for resolve_voice_id function."""

    def test_catalogue_name(self):
        self.assertEqual(resolve_voice_id("Rachel"), "21m00Tcm4TlvDq8ikWAM")

    def test_raw_id_passes_through(self):
        self.assertEqual(resolve_voice_id("abc123VoiceId"), "abc123VoiceId")
