"""
Utilities for handling file paths of the subscriptions file and output folders.
"""

from pathlib import Path

import aiofiles.os
from pathvalidate import sanitize_filename

DEFAULT_SUBSCRIPTIONS_FILENAME = "subscriptions.txt"


def resolve_subscriptions_path(path: Path | None) -> Path:
    """
    Resolves the subscriptions file location.

    No path means 'subscriptions.txt' in the current directory; a directory means
    the 'subscriptions.txt' inside it; anything else is taken as the file itself.
    """
    if path is None:
        return Path.cwd() / DEFAULT_SUBSCRIPTIONS_FILENAME
    resolved = path.expanduser().resolve()
    if resolved.is_dir():
        return resolved / DEFAULT_SUBSCRIPTIONS_FILENAME
    return resolved


def safe_dir_name(name: str) -> str:
    """
    Makes a section name or organize key usable as a single directory name, so it
    can never point outside the folder it is created in.
    """
    cleaned = sanitize_filename(name.strip(), platform="auto").strip()
    if cleaned in ("", ".", ".."):
        return "_"
    return cleaned


async def create_dir(directory_path: Path) -> None:
    """Creates a directory (and its parents) if it does not already exist."""
    await aiofiles.os.makedirs(directory_path, exist_ok=True)
