"""
Shared environment-driven document store configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_ALLOWED_BACKENDS = {"firestore", "memory"}


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@dataclass(frozen=True)
class DocumentStoreSettings:
    """
    Which document store backend to use and how to reach it.

    ``project_id`` and ``database_id`` are optional for Firestore; when unset
    the client library resolves them from the ambient Google credentials.
    ``FIRESTORE_EMULATOR_HOST`` is honoured by the client library directly.
    """

    backend: str = "firestore"
    project_id: str | None = None
    database_id: str | None = None


def _optional(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@lru_cache(maxsize=1)
def get_document_store_settings() -> DocumentStoreSettings:
    """
    Resolve document store settings from the environment and optional .env files.

    Raises RuntimeError for an unknown DOCUMENT_STORE_BACKEND.
    """

    load_env_files()

    backend = (os.getenv("DOCUMENT_STORE_BACKEND") or "firestore").strip().lower()
    if backend not in _ALLOWED_BACKENDS:
        raise RuntimeError(
            f"DOCUMENT_STORE_BACKEND='{backend}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_BACKENDS)}."
        )

    return DocumentStoreSettings(
        backend=backend,
        project_id=_optional("FIRESTORE_PROJECT_ID") or _optional("GOOGLE_CLOUD_PROJECT"),
        database_id=_optional("FIRESTORE_DATABASE_ID"),
    )
