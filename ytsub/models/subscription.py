"""
Data structures produced by the subscriptions file parser.
"""

import re
from dataclasses import dataclass, field

# JavaScript-style flags accepted after the closing slash of a pattern.
FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
    "g": 0,
    "y": 0,
}


@dataclass(frozen=True)
class OrganizePattern:
    """A compiled '/pattern/flags' literal used to route files."""

    source: str
    flags: str
    regex: re.Pattern = field(compare=False, repr=False)

    @classmethod
    def compile(cls, source: str, flags: str = "") -> "OrganizePattern":
        """
        Compiles a pattern with its flag string.

        Raises:
            ValueError: If a flag is unknown.
            re.error: If the pattern does not compile.
        """
        re_flags = 0
        for flag in flags:
            if flag not in FLAG_MAP:
                raise ValueError(f"Unknown flag '{flag}'")
            re_flags |= FLAG_MAP[flag]
        return cls(source=source, flags=flags, regex=re.compile(source, re_flags))

    @property
    def sticky(self) -> bool:
        return "y" in self.flags

    def matches(self, filename: str) -> bool:
        """Tests a filename. Sticky patterns must match at the very start."""
        if self.sticky:
            return self.regex.match(filename) is not None
        return self.regex.search(filename) is not None

    def __str__(self) -> str:
        return f"/{self.source}/{self.flags}"


OrganizeRules = dict[str, OrganizePattern]


@dataclass
class Section:
    """One '[name]' block of the document."""

    name: str
    front_matter: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)


@dataclass
class Document:
    """The tokenized subscriptions file: preamble lines plus ordered sections."""

    preamble: list[str] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)


@dataclass
class GlobalConfig:
    """Arguments and organize rules declared before the first section."""

    arguments: list[str] = field(default_factory=list)
    organize_rules: OrganizeRules = field(default_factory=dict)


@dataclass
class Subscription:
    """A fully resolved subscription, ready to be downloaded and organized."""

    name: str
    arguments: list[str] = field(default_factory=list)
    organize_rules: OrganizeRules = field(default_factory=dict)
    urls: list[str] = field(default_factory=list)


@dataclass
class SubscriptionSet:
    """Everything resolved from one read of the subscriptions file."""

    global_config: GlobalConfig
    subscriptions: list[Subscription] = field(default_factory=list)

    @property
    def total_urls(self) -> int:
        return sum(len(sub.urls) for sub in self.subscriptions)
