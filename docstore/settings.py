from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_FILENAME = "docstore.json"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Location: explicit path wins over root + filename
    root: str
    filename: str
    path: str | None

    # Serialization
    pretty: bool


def load_env(env_file: str | Path | None = None) -> bool:
    """Load variables from an env file without overriding ones already set."""
    if env_file is None:
        return load_dotenv()
    return load_dotenv(env_file)


def get_settings() -> Settings:
    root = os.getenv("DOCSTORE_ROOT", "").strip() or "."
    filename = os.getenv("DOCSTORE_FILENAME", "").strip() or DEFAULT_FILENAME
    path = os.getenv("DOCSTORE_PATH", "").strip() or None

    pretty = _env_bool("DOCSTORE_PRETTY", True)

    return Settings(
        root=root,
        filename=filename,
        path=path,
        pretty=pretty,
    )
