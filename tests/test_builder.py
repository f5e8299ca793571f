"""
Tests for building resolved subscriptions from a document.
"""

from ytsub.parsing import parse_subscriptions


class TestParseSubscriptions:
    """End-to-end parsing of subscriptions files."""

    def test_single_section_with_global_rule(self):
        text = "-organize clips: /clip/i\n[music]\n----\nhttps://x/1\nhttps://x/2"
        result = parse_subscriptions(text)

        assert len(result.subscriptions) == 1
        music = result.subscriptions[0]
        assert music.name == "music"
        assert music.urls == ["https://x/1", "https://x/2"]
        assert music.arguments == []
        assert list(music.organize_rules) == ["clips"]
        assert str(music.organize_rules["clips"]) == "/clip/i"

    def test_no_sections_is_global_only(self):
        result = parse_subscriptions("--embed-metadata\n-organize a: /a/\n-f best")
        assert result.subscriptions == []
        assert result.global_config.arguments == ["--embed-metadata", "-f", "best"]
        assert list(result.global_config.organize_rules) == ["a"]

    def test_local_settings_merge_with_global(self, sample_document: str):
        result = parse_subscriptions(sample_document)
        music, news = result.subscriptions

        assert music.arguments == [
            "--embed-metadata",
            "-o",
            "%(title)s.%(ext)s",
            "-x",
            "--audio-format",
            "mp3",
        ]
        assert music.organize_rules["clips"].source == "live"
        assert music.organize_rules["shorts"].source == "#shorts"
        assert list(music.organize_rules) == ["clips", "shorts"]

        assert news.arguments == ["--embed-metadata", "-o", "%(title)s.%(ext)s"]
        assert news.organize_rules["clips"].source == "clip"
        assert news.urls == ["https://x/3"]
        assert result.total_urls == 3

    def test_invalid_local_rule_keeps_global_one(self):
        text = "-organize clips: /clip/\n[a]\n-organize clips: /(/\n----\nu1"
        result = parse_subscriptions(text)
        assert result.subscriptions[0].organize_rules["clips"].source == "clip"

    def test_empty_document(self):
        result = parse_subscriptions("")
        assert result.subscriptions == []
        assert result.global_config.arguments == []
        assert result.global_config.organize_rules == {}
