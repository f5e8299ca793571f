"""
Interprets preamble and front matter lines.

A line is either an '-organize <key>: /pattern/flags' directive, which declares
where matching files get moved, or a list of arguments passed through to the
downloader.
"""

import logging
import re

from rich.markup import escape

from ytsub.exceptions import OrganizeRuleError
from ytsub.models.subscription import OrganizePattern, OrganizeRules

log = logging.getLogger(__name__)

_DIRECTIVE_PREFIX = re.compile(r"^-organize\s")
_ORGANIZE_PATTERN = re.compile(
    r"""^-organize\s+
        (?P<key>"[^"]*"|'[^']*'|.+?)      # optionally quoted destination
        \s*(?::\s*|\s+)
        (?P<value>/.*)$                   # /pattern/flags literal
    """,
    re.VERBOSE,
)
_REGEX_LITERAL = re.compile(r"^/(?P<pattern>.*)/(?P<flags>[a-z]*)$")
_ARGUMENT_TOKEN = re.compile(r'(?:[^\s"]+|"[^"]*")+')


def is_organize_directive(line: str) -> bool:
    return _DIRECTIVE_PREFIX.match(line) is not None


def parse_organize_directive(line: str) -> tuple[str, OrganizePattern]:
    """
    Parses an '-organize' line into its destination key and compiled pattern.

    Raises:
        OrganizeRuleError: If the key or pattern is missing or does not compile.
    """
    match = _ORGANIZE_PATTERN.match(line.strip())
    if not match:
        raise OrganizeRuleError("Expected '-organize <name>: /pattern/flags'")

    key = match.group("key").strip()
    if len(key) >= 2 and key[0] == key[-1] and key[0] in "\"'":
        key = key[1:-1]
    if not key:
        raise OrganizeRuleError("Destination name is empty")

    literal = _REGEX_LITERAL.match(match.group("value").strip())
    if not literal or not literal.group("pattern"):
        raise OrganizeRuleError("Invalid pattern!")

    try:
        pattern = OrganizePattern.compile(literal.group("pattern"), literal.group("flags"))
    except (re.error, ValueError) as e:
        raise OrganizeRuleError(str(e)) from e
    return key, pattern


def split_arguments(line: str) -> list[str]:
    """
    Splits a line into shell-like tokens. Double-quoted runs stay within one
    token and all double quotes are removed.
    """
    return [token.replace('"', "") for token in _ARGUMENT_TOKEN.findall(line)]


def resolve_directives(lines: list[str], scope: str) -> tuple[list[str], OrganizeRules]:
    """
    Resolves configuration lines into downloader arguments and organize rules.

    Args:
        lines: Preamble or front matter lines, already stripped of comments.
        scope: Label used in diagnostics, e.g. 'global' or '[music]'.

    Returns:
        A tuple of (arguments, organize_rules). Invalid organize rules are
        reported and skipped.
    """
    arguments: list[str] = []
    rules: OrganizeRules = {}

    for line in lines:
        if is_organize_directive(line):
            try:
                key, pattern = parse_organize_directive(line)
            except OrganizeRuleError as e:
                log.warning(
                    f"[yellow]Invalid organize rule in {escape(scope)}: "
                    f"{escape(line)} ({escape(str(e))}). Skipping.[/yellow]"
                )
                continue
            rules[key] = pattern
        else:
            arguments.extend(split_arguments(line))

    return arguments, rules


def merge_arguments(global_args: list[str], local_args: list[str]) -> list[str]:
    """Global arguments first, then local ones. Duplicates are kept."""
    return [*global_args, *local_args]


def merge_organize_rules(
    global_rules: OrganizeRules, local_rules: OrganizeRules
) -> OrganizeRules:
    """Overlays local rules on the global ones; a local key replaces the global entry."""
    return {**global_rules, **local_rules}
