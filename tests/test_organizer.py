"""
Tests for sorting downloaded files into rule folders.
"""

import asyncio
import os
from pathlib import Path

import pytest

from ytsub.media.organizer import Organizer, is_media_file, match_rule
from ytsub.models.subscription import OrganizePattern


def _rules(**patterns: str):
    return {key: OrganizePattern.compile(source, "i") for key, source in patterns.items()}


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_text("data")


class TestIsMediaFile:
    """Tests for the extension allow-list."""

    @pytest.mark.parametrize(
        "name",
        [
            "a.mp4",
            "a.MKV",
            "a.webm",
            "a.mp3",
            "a.opus",
            "a.jpg",
            "a.webp",
            "a.info.json",
            "a.en.vtt",
            "a.description",
        ],
    )
    def test_allowed(self, name):
        assert is_media_file(name)

    @pytest.mark.parametrize("name", ["a.part", "a.txt", "a.ytdl", "noext", "a.mp4.part"])
    def test_rejected(self, name):
        assert not is_media_file(name)


class TestMatchRule:
    def test_first_match_wins(self):
        rules = _rules(live="live", clips="clip")
        assert match_rule("live clip.mp4", rules) == "live"

    def test_no_match(self):
        assert match_rule("song.mp3", _rules(clips="clip")) is None


class TestOrganizer:
    """Tests for moving files on disk."""

    def test_moves_matching_files(self, temp_dir: Path):
        _touch(temp_dir, "My Clip.mp4", "Live Set.mkv", "song.mp3")
        rules = _rules(clips="clip", live="live")

        result = asyncio.run(Organizer().organize(temp_dir, rules))

        assert (temp_dir / "clips" / "My Clip.mp4").is_file()
        assert (temp_dir / "live" / "Live Set.mkv").is_file()
        assert (temp_dir / "song.mp3").is_file()
        assert sorted(result.moved) == [("Live Set.mkv", "live"), ("My Clip.mp4", "clips")]
        assert result.unmatched == 1

    def test_at_most_one_move_per_file(self, temp_dir: Path):
        _touch(temp_dir, "live clip.mp4")
        rules = _rules(clips="clip", live="live")

        result = asyncio.run(Organizer().organize(temp_dir, rules))

        assert result.moved == [("live clip.mp4", "clips")]
        assert (temp_dir / "clips" / "live clip.mp4").is_file()
        assert not (temp_dir / "live").exists()

    def test_skips_archive_non_media_and_directories(self, temp_dir: Path):
        _touch(temp_dir, "_archive.txt", "clip.part", "notes.txt")
        (temp_dir / "clip folder.mp4").mkdir()
        rules = _rules(clips=".")

        result = asyncio.run(Organizer().organize(temp_dir, rules))

        assert result.moved == []
        assert (temp_dir / "_archive.txt").is_file()
        assert (temp_dir / "clip.part").is_file()
        assert not (temp_dir / "clips").exists()

    def test_custom_archive_name_is_excluded(self, temp_dir: Path):
        _touch(temp_dir, "history.json", "clip.json")
        result = asyncio.run(
            Organizer(archive_name="history.json").organize(temp_dir, _rules(meta="json"))
        )
        assert result.moved == [("clip.json", "meta")]
        assert (temp_dir / "history.json").is_file()

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinks_are_left_alone(self, temp_dir: Path):
        _touch(temp_dir, "real.txt")
        (temp_dir / "clip.mp4").symlink_to(temp_dir / "real.txt")
        result = asyncio.run(Organizer().organize(temp_dir, _rules(clips="clip")))
        assert result.moved == []

    def test_second_run_moves_nothing(self, temp_dir: Path):
        _touch(temp_dir, "clip 1.mp4", "clip 2.mp4", "other.mp4")
        rules = _rules(clips="clip")
        organizer = Organizer()

        first = asyncio.run(organizer.organize(temp_dir, rules))
        second = asyncio.run(organizer.organize(temp_dir, rules))

        assert len(first.moved) == 2
        assert second.moved == []
        assert sorted(p.name for p in (temp_dir / "clips").iterdir()) == [
            "clip 1.mp4",
            "clip 2.mp4",
        ]

    def test_existing_destination_is_not_overwritten(self, temp_dir: Path):
        (temp_dir / "clips").mkdir()
        (temp_dir / "clips" / "clip.mp4").write_text("old")
        (temp_dir / "clip.mp4").write_text("new")

        result = asyncio.run(Organizer().organize(temp_dir, _rules(clips="clip")))

        assert result.failed == ["clip.mp4"]
        assert (temp_dir / "clips" / "clip.mp4").read_text() == "old"
        assert (temp_dir / "clip.mp4").read_text() == "new"

    def test_failed_move_does_not_stop_other_files(self, temp_dir: Path):
        (temp_dir / "clips").mkdir()
        (temp_dir / "clips" / "a clip.mp4").write_text("old")
        _touch(temp_dir, "a clip.mp4", "b clip.mp4")

        result = asyncio.run(Organizer().organize(temp_dir, _rules(clips="clip")))

        assert result.failed == ["a clip.mp4"]
        assert result.moved == [("b clip.mp4", "clips")]

    def test_no_rules_is_a_no_op(self, temp_dir: Path):
        _touch(temp_dir, "clip.mp4")
        result = asyncio.run(Organizer().organize(temp_dir, {}))
        assert result.moved == []
        assert (temp_dir / "clip.mp4").is_file()

    def test_destination_name_cannot_escape(self, temp_dir: Path):
        _touch(temp_dir, "clip.mp4")
        asyncio.run(Organizer().organize(temp_dir, _rules(**{"../up": "clip"})))
        assert not (temp_dir.parent / "up").exists()
        assert len([p for p in temp_dir.iterdir() if p.is_dir()]) == 1
