"""Pytest configuration and shared fixtures for JMdict kana index tests."""

import io
import json
import tarfile
from pathlib import Path
from typing import Dict, Optional

import pytest


# Minimal JMdict-simplified document
SAMPLE_DICTIONARY = {
    "version": "3.6.1",
    "dictDate": "2024-01-01",
    "words": [
        {
            "id": "1150410",
            "kanji": [{"text": "愛"}],
            "kana": [{"text": "あい"}],
        },
        {
            "id": "1150420",
            "kanji": [{"text": "相"}, {"text": "愛"}],
            "kana": [{"text": "あい"}],
        },
        {
            "id": "1000220",
            "kanji": [{"text": "明白"}],
            "kana": [{"text": "めいはく"}, {"text": "あからさま"}],
        },
        {
            "id": "1000090",
            "kana": [{"text": "ああ"}],
        },
    ],
}


def make_tarball(
    archive_path: Path,
    files: Dict[str, bytes],
    directories: Optional[list] = None
) -> Path:
    """Write a .tgz archive with the given members, directories first."""
    with tarfile.open(archive_path, "w:gz") as tar:
        for name in directories or []:
            info = tarfile.TarInfo(name)
            info.type = tarfile.DIRTYPE
            info.mode = 0o755
            tar.addfile(info)
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    return archive_path


@pytest.fixture
def sample_dictionary() -> dict:
    """Provide a parsed sample source dictionary."""
    return json.loads(json.dumps(SAMPLE_DICTIONARY))


@pytest.fixture
def sample_dictionary_bytes() -> bytes:
    """Provide the sample source dictionary as UTF-8 JSON."""
    return json.dumps(SAMPLE_DICTIONARY, ensure_ascii=False).encode("utf-8")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Provide an empty data folder."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def release_dir(tmp_path: Path) -> Path:
    """Provide an empty release folder."""
    path = tmp_path / "release"
    path.mkdir()
    return path


@pytest.fixture
def sample_archive(tmp_path: Path, sample_dictionary_bytes: bytes) -> Path:
    """Create a release-shaped .tgz holding the sample dictionary."""
    return make_tarball(
        tmp_path / "jmdict-all-3.6.1.json.tgz",
        {"jmdict-all-3.6.1.json": sample_dictionary_bytes},
    )
