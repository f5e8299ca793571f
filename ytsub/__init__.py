"""
ytsub - keeps folders of yt-dlp subscriptions up to date and tidy.
"""

__version__ = "0.3.0"
