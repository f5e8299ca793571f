"""
Moves downloaded files into subfolders according to ordered organize rules.
"""

import logging
from pathlib import Path

import aiofiles.os
from rich.markup import escape

from ytsub.models.config import DEFAULT_ARCHIVE_NAME
from ytsub.models.stats import OrganizeResult
from ytsub.models.subscription import OrganizeRules
from ytsub.utils.path import create_dir, safe_dir_name

log = logging.getLogger(__name__)

VIDEO_EXTENSIONS = ("mp4", "mkv", "webm", "mov", "avi", "flv", "m4v", "ts", "3gp")
AUDIO_EXTENSIONS = ("mp3", "m4a", "aac", "opus", "ogg", "oga", "flac", "wav", "weba")
IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "webp", "gif")
SIDECAR_EXTENSIONS = ("json", "description", "nfo", "srt", "vtt", "ass", "ssa", "lrc")

MEDIA_EXTENSIONS = frozenset(
    VIDEO_EXTENSIONS + AUDIO_EXTENSIONS + IMAGE_EXTENSIONS + SIDECAR_EXTENSIONS
)


def is_media_file(filename: str) -> bool:
    """True if the name ends in one of the known media or sidecar extensions."""
    _, dot, extension = filename.rpartition(".")
    return bool(dot) and extension.lower() in MEDIA_EXTENSIONS


def match_rule(filename: str, rules: OrganizeRules) -> str | None:
    """Returns the destination of the first rule matching the filename, if any."""
    for destination, pattern in rules.items():
        if pattern.matches(filename):
            return destination
    return None


class Organizer:
    """Sorts the files of a subscription folder into rule-named subfolders."""

    def __init__(self, archive_name: str = DEFAULT_ARCHIVE_NAME):
        self.archive_name = archive_name

    async def _candidates(self, directory: Path) -> list[str]:
        """Regular media files directly inside the directory, in name order."""
        names = []
        for name in sorted(await aiofiles.os.listdir(directory)):
            if name == self.archive_name or not is_media_file(name):
                continue
            path = directory / name
            if await aiofiles.os.path.islink(path):
                continue
            if await aiofiles.os.path.isfile(path):
                names.append(name)
        return names

    async def organize(self, directory: Path, rules: OrganizeRules) -> OrganizeResult:
        """
        Moves each candidate file into the folder of the first matching rule.

        Files that match no rule stay where they are. A failed move is logged and
        the remaining files are still processed. Files already inside a
        subfolder are never looked at again.
        """
        result = OrganizeResult()
        if not rules:
            log.debug(f"No organize rules for [dim]{directory}[/dim]")
            return result

        log.info(f"Organizing files in [dim]{directory}[/dim]")
        for name in await self._candidates(directory):
            destination = match_rule(name, rules)
            if destination is None:
                result.unmatched += 1
                continue

            target_dir = directory / safe_dir_name(destination)
            target = target_dir / name
            try:
                await create_dir(target_dir)
                if await aiofiles.os.path.exists(target):
                    raise FileExistsError(f"'{target}' already exists")
                await aiofiles.os.rename(directory / name, target)
            except OSError as e:
                log.error(f"[red]✗ Could not move {escape(name)}: {escape(str(e))}[/red]")
                result.failed.append(name)
                continue

            log.info(f"Moved {escape(name)} → [cyan]{escape(target_dir.name)}[/cyan]")
            result.moved.append((name, destination))

        return result
