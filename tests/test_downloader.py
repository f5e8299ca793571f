"""
Tests for the external downloader wrapper.
"""

import asyncio
import os
import stat
from pathlib import Path

import pytest

from ytsub.exceptions import DownloadError
from ytsub.media import Downloader

posix_only = pytest.mark.skipif(os.name == "nt", reason="uses a shell script")


def _script(directory: Path, body: str) -> Path:
    """Writes an executable stand-in for yt-dlp."""
    script = directory / "fake-ytdlp"
    script.write_text(f"#!/bin/sh\n{body}\n")
    script.chmod(script.stat().st_mode | stat.S_IEXEC)
    return script


class TestBuildCommand:
    def test_command_layout(self, temp_dir: Path):
        downloader = Downloader()
        command = downloader.build_command("https://x/1", temp_dir, ["-f", "best"])
        assert command == [
            "yt-dlp",
            "-P",
            str(temp_dir),
            "--download-archive",
            str(temp_dir / "_archive.txt"),
            "-f",
            "best",
            "https://x/1",
        ]

    def test_custom_executable_and_archive(self, temp_dir: Path):
        downloader = Downloader("/opt/yt-dlp", archive_name="done.txt")
        command = downloader.build_command("u", temp_dir, [])
        assert command[0] == "/opt/yt-dlp"
        assert command[4] == str(temp_dir / "done.txt")
        assert command[-1] == "u"


class TestDownload:
    """Tests for running the process."""

    def test_missing_executable(self, temp_dir: Path):
        downloader = Downloader(str(temp_dir / "does-not-exist"))
        with pytest.raises(DownloadError) as exc_info:
            asyncio.run(downloader.download("https://x/1", temp_dir, []))
        assert exc_info.value.url == "https://x/1"
        assert exc_info.value.returncode is None

    @posix_only
    def test_non_zero_exit(self, temp_dir: Path):
        downloader = Downloader(str(_script(temp_dir, "exit 3")))
        with pytest.raises(DownloadError) as exc_info:
            asyncio.run(downloader.download("u", temp_dir, []))
        assert exc_info.value.returncode == 3

    @posix_only
    def test_success_runs_in_output_dir(self, temp_dir: Path):
        output_dir = temp_dir / "out"
        output_dir.mkdir()
        script = _script(temp_dir, 'printf "%s\\n" "$@" > args.txt')

        asyncio.run(Downloader(str(script)).download("https://x/1", output_dir, ["-x"]))

        args = (output_dir / "args.txt").read_text().splitlines()
        assert args == [
            "-P",
            str(output_dir),
            "--download-archive",
            str(output_dir / "_archive.txt"),
            "-x",
            "https://x/1",
        ]

