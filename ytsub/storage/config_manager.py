"""
Manages locating, validating and reading the subscriptions file.
"""

import logging
from pathlib import Path
from typing import Any

import aiofiles
from pydantic import ValidationError

from ytsub.exceptions import ConfigurationError
from ytsub.models.config import RunConfig
from ytsub.models.subscription import SubscriptionSet
from ytsub.parsing import parse_subscriptions
from ytsub.utils.path import (
    DEFAULT_SUBSCRIPTIONS_FILENAME,
    resolve_subscriptions_path,
)

log = logging.getLogger(__name__)

EXAMPLE_SUBSCRIPTIONS = """\
# Lines before the first [section] apply to every subscription.
# Anything that is not an -organize rule is passed to yt-dlp as is.
-f "bv*[height<=1080]+ba/b"
--embed-metadata
--write-thumbnail      ; comments after ';' are ignored
-o "%(upload_date)s - %(title)s.%(ext)s"

# Move finished files whose name matches a pattern into a subfolder.
-organize shorts: /#shorts/i

[lofi]
--match-filter "duration > 600"
-organize mixes: /mix|compilation/i
----
https://www.youtube.com/@LofiGirl/videos

[podcasts]
-x --audio-format mp3
-organize "guest episodes": /\\bfeat\\.|\\bwith\\b/i
=====
https://www.youtube.com/@lexfridman/videos
https://www.youtube.com/@hubermanlab/videos
"""


class ConfigManager:
    """Handles locating, loading and creating the subscriptions file."""

    def __init__(self, subscriptions_file_path: Path):
        self.subscriptions_file_path = subscriptions_file_path

    @classmethod
    def from_cli_path(cls, path: Path | None) -> "ConfigManager":
        """Builds a manager from the optional PATH argument (file or directory)."""
        return cls(resolve_subscriptions_path(path))

    def build_run_config(self, cli_options: dict[str, Any] | None = None) -> RunConfig:
        """
        Validates the run options against the subscriptions file location.

        Raises:
            ConfigurationError: If the subscriptions file is missing or an option
            is invalid.
        """
        if not self.subscriptions_file_path.is_file():
            raise ConfigurationError(
                f"Subscriptions file not found at '{self.subscriptions_file_path}'. "
                "Run 'ytsub --create' to get an example."
            )

        options = {k: v for k, v in (cli_options or {}).items() if v is not None}
        try:
            return RunConfig(subscriptions_file=self.subscriptions_file_path, **options)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    async def load_subscriptions(self) -> SubscriptionSet:
        """
        Reads and resolves the subscriptions file. Called on every pass so edits
        are picked up without a restart.
        """
        try:
            async with aiofiles.open(self.subscriptions_file_path, encoding="utf-8") as f:
                text = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Could not read subscriptions file '{self.subscriptions_file_path}':"
                f" {e}"
            ) from e

        subscription_set = parse_subscriptions(text)
        log.debug(
            f"Loaded {len(subscription_set.subscriptions)} subscriptions from "
            f"[dim]{self.subscriptions_file_path}[/dim]"
        )
        return subscription_set

    @staticmethod
    def create_example(directory: Path) -> Path | None:
        """
        Writes the example subscriptions file into a directory.

        Returns:
            The created path, or None if a file already exists there.
        """
        destination = directory / DEFAULT_SUBSCRIPTIONS_FILENAME
        if destination.exists():
            return None
        try:
            destination.write_text(EXAMPLE_SUBSCRIPTIONS, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to write example file: {e}") from e
        return destination
