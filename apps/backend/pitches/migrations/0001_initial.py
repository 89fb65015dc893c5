# Generated manually

import uuid

import django.db.models.deletion
from django.db import migrations, models

import pitches.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PitchGeneration",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "owner_id",
                    models.CharField(
                        db_index=True, editable=False, max_length=100, verbose_name="Owner"
                    ),
                ),
                ("business_id", models.CharField(blank=True, max_length=100, verbose_name="Business")),
                ("answers", models.JSONField(default=dict, verbose_name="Wizard answers")),
                ("prompt", models.TextField(blank=True, verbose_name="Prompt")),
                (
                    "voice",
                    models.CharField(
                        default="rachel",
                        help_text="Catalogue voice name or raw ElevenLabs voice id",
                        max_length=64,
                        verbose_name="Voice",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("script_generating", "Writing script"),
                            ("script_ready", "Script ready"),
                            ("preview_generating", "Generating preview"),
                            ("preview_ready", "Preview ready"),
                            ("hq_generating", "Generating HQ audio"),
                            ("hq_ready", "HQ audio ready"),
                            ("failed", "Failed"),
                        ],
                        default="draft",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                (
                    "failed_at_status",
                    models.CharField(
                        blank=True,
                        help_text="Generating status the failure happened in (selects the retry)",
                        max_length=20,
                        verbose_name="Failed at status",
                    ),
                ),
                ("failure_reason", models.TextField(blank=True, verbose_name="Failure reason")),
                ("script_text", models.TextField(blank=True, verbose_name="Script")),
                (
                    "preview_audio",
                    models.FileField(
                        blank=True,
                        max_length=255,
                        upload_to=pitches.models.generation_audio_path,
                        verbose_name="Preview audio",
                    ),
                ),
                (
                    "preview_char_count",
                    models.PositiveIntegerField(default=0, verbose_name="Preview characters"),
                ),
                (
                    "hq_audio",
                    models.FileField(
                        blank=True,
                        max_length=255,
                        upload_to=pitches.models.generation_audio_path,
                        verbose_name="HQ audio",
                    ),
                ),
                ("hq_char_count", models.PositiveIntegerField(default=0, verbose_name="HQ characters")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated")),
            ],
            options={
                "verbose_name": "Pitch generation",
                "verbose_name_plural": "Pitch generations",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="UsageRecord",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "service",
                    models.CharField(
                        choices=[("gemini", "Gemini"), ("elevenlabs", "ElevenLabs")],
                        max_length=20,
                        verbose_name="Service",
                    ),
                ),
                (
                    "operation",
                    models.CharField(
                        choices=[
                            ("script_generation", "Script generation"),
                            ("tts_preview", "Preview audio"),
                            ("tts_hq", "HQ audio"),
                        ],
                        max_length=30,
                        verbose_name="Operation",
                    ),
                ),
                ("input_tokens", models.PositiveIntegerField(default=0, verbose_name="Input tokens")),
                ("output_tokens", models.PositiveIntegerField(default=0, verbose_name="Output tokens")),
                ("characters", models.PositiveIntegerField(default=0, verbose_name="Characters")),
                (
                    "estimated_cost_cents",
                    models.PositiveIntegerField(default=0, verbose_name="Estimated cost (cents)"),
                ),
                ("model_name", models.CharField(blank=True, max_length=100, verbose_name="Model")),
                ("voice_id", models.CharField(blank=True, max_length=64, verbose_name="Voice id")),
                ("success", models.BooleanField(default=True, verbose_name="Success")),
                ("error_message", models.TextField(blank=True, verbose_name="Error")),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created"),
                ),
                (
                    "generation",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="usage_records",
                        to="pitches.pitchgeneration",
                        verbose_name="Generation",
                    ),
                ),
            ],
            options={
                "verbose_name": "AI usage",
                "verbose_name_plural": "AI usage",
                "ordering": ["-created_at"],
            },
        ),
    ]
