"""
Pytest configuration and shared fixtures for ytsub tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from ytsub.exceptions import DownloadError


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_subscriptions(temp_dir: Path):
    """Write a subscriptions.txt into the temp directory and return its path."""

    def _write(text: str) -> Path:
        path = temp_dir / "subscriptions.txt"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_document() -> str:
    """A subscriptions file using every feature of the format."""
    return """\
# global settings
--embed-metadata
-o "%(title)s.%(ext)s"   ; output template
-organize clips: /clip/i
-organize shorts: /#shorts/

[music]
-x --audio-format mp3
-organize clips: /live/i
----
https://x/1
https://x/2

// another subscription
[news]
https://x/3
"""


class FakeDownloader:
    """Records download calls instead of running yt-dlp."""

    def __init__(self, fail_urls=(), files_per_url=None):
        self.calls: list[tuple[str, Path, list[str]]] = []
        self.fail_urls = set(fail_urls)
        self.files_per_url = files_per_url or {}

    async def download(self, url: str, output_dir: Path, arguments: list[str]) -> None:
        self.calls.append((url, output_dir, list(arguments)))
        if url in self.fail_urls:
            raise DownloadError(url, "process exited with code 1", returncode=1)
        for name in self.files_per_url.get(url, []):
            (output_dir / name).write_text("data")


@pytest.fixture
def fake_downloader_factory():
    return FakeDownloader
