"""
Pydantic model for the run configuration.
Provides validation for everything the command line feeds into a run.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from ytsub.utils.duration import parse_interval

DEFAULT_DOWNLOADER = "yt-dlp"
DEFAULT_ARCHIVE_NAME = "_archive.txt"


class RunConfig(BaseModel):
    """A validated configuration model for one invocation of the application."""

    subscriptions_file: Path
    interval_seconds: int | None = None
    dry_run: bool = False

    # External downloader
    downloader: str = DEFAULT_DOWNLOADER
    archive_name: str = DEFAULT_ARCHIVE_NAME

    # Optional JSON event log
    log_dir: Path | None = Field(default=None, repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @property
    def base_dir(self) -> Path:
        """The folder holding the subscriptions file; subscriptions live under it."""
        return self.subscriptions_file.parent

    @field_validator("interval_seconds", mode="before")
    @classmethod
    def validate_interval(cls, v):
        """Accepts a duration expression ('2h30m', '90s', '45') or a number of seconds."""
        if v is None:
            return None
        if isinstance(v, str):
            return parse_interval(v)
        if int(v) <= 0:
            raise ValueError("Interval must be greater than zero.")
        return int(v)

    @field_validator("downloader")
    @classmethod
    def validate_downloader(cls, v: str) -> str:
        if not v:
            raise ValueError("Downloader executable cannot be empty.")
        return v

    @field_validator("archive_name")
    @classmethod
    def validate_archive_name(cls, v: str) -> str:
        """The archive file lives inside each subscription folder."""
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError("Archive name must be a plain file name.")
        return v
