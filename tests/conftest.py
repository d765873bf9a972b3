"""Shared test fixtures — sample ignore files and a file factory."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

COMMIT = "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678"

SAMPLE_LINES = [
    "# gitleaks suppressions",
    f"{COMMIT}:src/app.py:aws-access-token:12",
    "",
    "archive.tar.gz:inner.tar:secret.env:generic-api-key:3",
    "this line is not a fingerprint",
    "config/settings.py:slack-webhook-url:40",
]


@pytest.fixture
def write_ignore_file(tmp_path: Path) -> Callable[..., Path]:
    """Write raw text to ``tmp_path/.gitleaksignore`` and return its path."""

    def _write(text: str, name: str = ".gitleaksignore") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def sample_ignore_file(write_ignore_file) -> Path:
    """A six-line ignore file mixing every line type, LF endings."""
    return write_ignore_file("\n".join(SAMPLE_LINES) + "\n")


@pytest.fixture
def numbered_ignore_file(write_ignore_file) -> Path:
    """A 100-line ignore file of distinct fingerprints."""
    body = "".join(f"src/file{i}.py:rule-{i}:{i}\n" for i in range(1, 101))
    return write_ignore_file(body)
