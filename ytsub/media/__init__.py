"""
Media Processing Layer.

This package drives the external downloader and sorts the files it produces.
"""

from .downloader import Downloader
from .organizer import Organizer

__all__ = ["Downloader", "Organizer"]
