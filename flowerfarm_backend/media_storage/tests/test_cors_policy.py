# media_storage/tests/test_cors_policy.py

from __future__ import annotations

import json
import tempfile
from io import StringIO
from pathlib import Path
from unittest import mock

from django.core.management import CommandError, call_command
from django.test import SimpleTestCase, override_settings
from google.api_core import exceptions as gcloud_exceptions

from media_storage.services.cors_policy import (
    CorsRule,
    apply_cors_policy,
    build_cors_policy,
    get_cors_policy,
)
from media_storage.services.exceptions import CorsConfigurationError

CORS_SETTINGS = {
    "STORAGE_CORS_ORIGINS": ["https://shop.example", "http://localhost:3000"],
    "STORAGE_CORS_METHODS": ["get", "head"],
    "STORAGE_CORS_RESPONSE_HEADERS": ["Content-Type"],
    "STORAGE_CORS_MAX_AGE": 600,
    "GCS_BUCKET_NAME": "flowers.appspot.com",
}


def fake_client():
    client = mock.Mock()
    client.bucket.return_value.name = "flowers.appspot.com"
    return client


@override_settings(**CORS_SETTINGS)
class BuildPolicyTests(SimpleTestCase):
    def test_policy_from_settings(self):
        self.assertEqual(
            build_cors_policy(),
            [
                {
                    "origin": ["https://shop.example", "http://localhost:3000"],
                    "method": ["GET", "HEAD"],
                    "responseHeader": ["Content-Type"],
                    "maxAgeSeconds": 600,
                }
            ],
        )

    @override_settings(STORAGE_CORS_ORIGINS=[])
    def test_no_origins_is_an_error(self):
        with self.assertRaises(CorsConfigurationError):
            build_cors_policy()

    def test_negative_max_age_rejected(self):
        with self.assertRaises(CorsConfigurationError):
            CorsRule(origins=("*",), max_age_seconds=-1)

    def test_response_header_omitted_when_empty(self):
        self.assertNotIn("responseHeader", CorsRule(origins=("*",)).as_document())


@override_settings(**CORS_SETTINGS)
class BucketTests(SimpleTestCase):
    def test_apply_replaces_bucket_policy(self):
        client = fake_client()

        policy = apply_cors_policy(client=client)

        client.bucket.assert_called_once_with("flowers.appspot.com")
        bucket = client.bucket.return_value
        self.assertEqual(bucket.cors, policy)
        bucket.patch.assert_called_once_with()

    def test_explicit_bucket_wins(self):
        client = fake_client()
        apply_cors_policy("other-bucket", [{"origin": ["*"], "method": ["GET"]}], client=client)
        client.bucket.assert_called_once_with("other-bucket")

    @override_settings(GCS_BUCKET_NAME="")
    def test_missing_bucket_name(self):
        with self.assertRaises(CorsConfigurationError):
            apply_cors_policy(client=fake_client())

    def test_api_failure_is_wrapped(self):
        client = fake_client()
        client.bucket.return_value.patch.side_effect = gcloud_exceptions.Forbidden("denied")

        with self.assertRaises(CorsConfigurationError), self.assertLogs(
            "media_storage.services.cors_policy", level="ERROR"
        ):
            apply_cors_policy(client=client)

    def test_get_reloads_bucket(self):
        client = fake_client()
        client.bucket.return_value.cors = [{"origin": ["*"]}]

        self.assertEqual(get_cors_policy(client=client), [{"origin": ["*"]}])
        client.bucket.return_value.reload.assert_called_once_with()


@override_settings(**CORS_SETTINGS)
class CommandTests(SimpleTestCase):
    def test_dry_run_never_calls_cloud(self):
        out = StringIO()
        with mock.patch("media_storage.services.cors_policy.storage_client") as factory:
            call_command("set_bucket_cors", "--dry-run", stdout=out)

        factory.assert_not_called()
        self.assertIn('"maxAgeSeconds": 600', out.getvalue())

    def test_set_bucket_cors_applies(self):
        client = fake_client()
        with mock.patch(
            "media_storage.services.cors_policy.storage_client", return_value=client
        ):
            call_command("set_bucket_cors", "--bucket", "b1", stdout=StringIO())

        client.bucket.assert_called_once_with("b1")
        client.bucket.return_value.patch.assert_called_once_with()

    def test_failures_become_command_errors(self):
        client = fake_client()
        client.bucket.return_value.reload.side_effect = gcloud_exceptions.NotFound("no bucket")

        with mock.patch(
            "media_storage.services.cors_policy.storage_client", return_value=client
        ), self.assertRaises(CommandError):
            call_command("get_bucket_cors", stdout=StringIO())

    def test_write_cors_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "cors.json"
            call_command("write_cors_config", "--output", str(target), stdout=StringIO())

            written = json.loads(target.read_text(encoding="utf-8"))

        self.assertEqual(written[0]["origin"], CORS_SETTINGS["STORAGE_CORS_ORIGINS"])
