"""Firestore client construction (REST-based, no firebase-admin).

Built at app startup from either FIREBASE_SERVICE_ACCOUNT_KEY (JSON string)
or FIREBASE_SERVICE_ACCOUNT_PATH (file path). The caller owns the returned
client and closes it on shutdown; nothing is cached at module level.
"""

import json
import logging
from pathlib import Path

from potracker.core.config import Settings
from potracker.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def create_firestore_client(settings: Settings) -> FirestoreRESTClient | None:
    """Build the Firestore REST client from service account settings.

    On missing or malformed credentials, logs the problem and returns None
    so the app can start and report not-ready instead of crashing.

    Returns:
        A new client, or None if Firestore could not be configured.
    """
    try:
        key_dict = _load_key_dict(settings)
        if not key_dict:
            return None

        project_id = key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return None

        return FirestoreRESTClient(project_id, _get_credentials(key_dict))
    except Exception:
        logger.exception("Firebase initialization failed")
        return None
