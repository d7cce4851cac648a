from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import docstore` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Clear DOCSTORE_* variables and run from a temp cwd so tests never touch a real store.
    """
    for name in ("DOCSTORE_ROOT", "DOCSTORE_FILENAME", "DOCSTORE_PATH", "DOCSTORE_PRETTY"):
        # setenv first so monkeypatch also removes values load_dotenv adds later
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "db" / "store.json"


@pytest.fixture
def store(clean_env: Path, store_path: Path):
    from docstore import DocumentStore

    return DocumentStore(store_path)


@pytest.fixture
def posts(store):
    return store.collection("posts")
