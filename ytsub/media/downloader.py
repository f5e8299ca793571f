"""
Runs the external downloader (yt-dlp by default) for a single URL.
"""

import asyncio
import logging
from pathlib import Path

from rich.markup import escape

from ytsub.exceptions import DownloadError
from ytsub.models.config import DEFAULT_ARCHIVE_NAME, DEFAULT_DOWNLOADER

log = logging.getLogger(__name__)


class Downloader:
    """
    Invokes the downloader executable once per URL.

    The tool writes into the subscription folder and keeps its own archive file
    there, so already downloaded items are skipped on later passes.
    """

    def __init__(
        self,
        executable: str = DEFAULT_DOWNLOADER,
        archive_name: str = DEFAULT_ARCHIVE_NAME,
    ):
        self.executable = executable
        self.archive_name = archive_name

    def build_command(self, url: str, output_dir: Path, arguments: list[str]) -> list[str]:
        """Builds the argv for one invocation."""
        return [
            self.executable,
            "-P",
            str(output_dir),
            "--download-archive",
            str(output_dir / self.archive_name),
            *arguments,
            url,
        ]

    async def download(self, url: str, output_dir: Path, arguments: list[str]) -> None:
        """
        Downloads everything behind a URL into output_dir and waits for the tool
        to exit. Output is inherited so the tool's own progress stays visible.

        Raises:
            DownloadError: If the process cannot be started or exits non-zero.
        """
        command = self.build_command(url, output_dir, arguments)
        log.debug(f"Running: [dim]{escape(' '.join(command))}[/dim]")

        try:
            process = await asyncio.create_subprocess_exec(*command, cwd=output_dir)
        except OSError as e:
            raise DownloadError(url, f"could not start '{self.executable}': {e}") from e

        returncode = await process.wait()
        if returncode != 0:
            raise DownloadError(
                url, f"process exited with code {returncode}", returncode=returncode
            )
        log.info(f"[green]✓ Downloaded[/green] {escape(url)} → [dim]{output_dir}[/dim]")
