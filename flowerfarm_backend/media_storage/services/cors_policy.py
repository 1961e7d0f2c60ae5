# media_storage/services/cors_policy.py

"""
BUCKET CORS POLICY

The storefront loads product photos straight from the storage bucket, so the
bucket needs a CORS policy listing the shop's origins.

Policy document (the shape Cloud Storage and `gsutil cors set` use):
[
  {"origin": [...], "method": [...], "responseHeader": [...], "maxAgeSeconds": 3600}
]

Rules:
- the policy is built from settings only (STORAGE_CORS_*)
- origins and methods must be non-empty, max age must be >= 0
- apply replaces the whole bucket policy (last write wins, no merge)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from django.conf import settings
from google.api_core import exceptions as gcloud_exceptions
from google.cloud import storage
from google.oauth2 import service_account

from media_storage.services.exceptions import CorsConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_METHODS = ("GET", "HEAD", "OPTIONS")
DEFAULT_MAX_AGE = 3600


@dataclass(frozen=True)
class CorsRule:
    origins: tuple[str, ...]
    methods: tuple[str, ...] = DEFAULT_METHODS
    response_headers: tuple[str, ...] = field(default_factory=tuple)
    max_age_seconds: int = DEFAULT_MAX_AGE

    def __post_init__(self):
        if not self.origins:
            raise CorsConfigurationError("CORS rule needs at least one origin")
        if not self.methods:
            raise CorsConfigurationError("CORS rule needs at least one method")
        if self.max_age_seconds < 0:
            raise CorsConfigurationError("maxAgeSeconds must be >= 0")

    def as_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "origin": list(self.origins),
            "method": [m.upper() for m in self.methods],
        }
        if self.response_headers:
            doc["responseHeader"] = list(self.response_headers)
        doc["maxAgeSeconds"] = self.max_age_seconds
        return doc


def build_cors_policy() -> list[dict[str, Any]]:
    rule = CorsRule(
        origins=tuple(getattr(settings, "STORAGE_CORS_ORIGINS", ()) or ()),
        methods=tuple(getattr(settings, "STORAGE_CORS_METHODS", DEFAULT_METHODS) or ()),
        response_headers=tuple(getattr(settings, "STORAGE_CORS_RESPONSE_HEADERS", ()) or ()),
        max_age_seconds=int(getattr(settings, "STORAGE_CORS_MAX_AGE", DEFAULT_MAX_AGE)),
    )
    return [rule.as_document()]


def policy_json(policy: list[dict[str, Any]]) -> str:
    return json.dumps(policy, indent=2) + "\n"


def write_cors_config(path: str | Path, policy: list[dict[str, Any]] | None = None) -> Path:
    target = Path(path)
    try:
        target.write_text(policy_json(policy or build_cors_policy()), encoding="utf-8")
    except OSError as exc:
        raise CorsConfigurationError(f"Cannot write {target}: {exc}") from exc
    return target


# -----------------------------
# Cloud Storage
# -----------------------------


def storage_client() -> storage.Client:
    """Explicit key file when GCS_CREDENTIALS_FILE is set, else application default credentials."""
    project = getattr(settings, "GCS_PROJECT_ID", None) or None
    key_file = getattr(settings, "GCS_CREDENTIALS_FILE", None)
    if key_file:
        credentials = service_account.Credentials.from_service_account_file(key_file)
        return storage.Client(project=project or credentials.project_id, credentials=credentials)
    return storage.Client(project=project)


def _bucket(bucket_name: str | None, client):
    name = bucket_name or getattr(settings, "GCS_BUCKET_NAME", "")
    if not name:
        raise CorsConfigurationError("No bucket given and GCS_BUCKET_NAME is not set")
    return (client or storage_client()).bucket(name)


def apply_cors_policy(
    bucket_name: str | None = None,
    policy: list[dict[str, Any]] | None = None,
    *,
    client=None,
) -> list[dict[str, Any]]:
    policy = policy if policy is not None else build_cors_policy()
    bucket = _bucket(bucket_name, client)

    bucket.cors = policy
    try:
        bucket.patch()
    except gcloud_exceptions.GoogleAPICallError as exc:
        logger.error("Bucket CORS update failed", extra={"bucket": bucket.name, "detail": str(exc)})
        raise CorsConfigurationError(f"Could not update CORS on {bucket.name}: {exc}") from exc

    logger.info("Bucket CORS updated", extra={"bucket": bucket.name, "rules": len(policy)})
    return policy


def get_cors_policy(bucket_name: str | None = None, *, client=None) -> list[dict[str, Any]]:
    bucket = _bucket(bucket_name, client)
    try:
        bucket.reload()
    except gcloud_exceptions.GoogleAPICallError as exc:
        raise CorsConfigurationError(f"Could not read {bucket.name}: {exc}") from exc
    return list(bucket.cors or [])
