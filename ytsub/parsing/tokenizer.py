"""
Splits the raw text of a subscriptions file into a preamble and named sections.

Each section is further split into front matter (configuration lines) and a
body (URLs) at the first separator line made of four or more '-' or '='.
"""

import re

from ytsub.models.subscription import Document, Section

FULL_LINE_COMMENT_PREFIXES = ("#", "//", ";")
SEPARATOR_PATTERN = re.compile(r"^\s*[-=]{4,}\s*$")


def strip_inline_comment(line: str) -> str:
    """
    Removes a trailing ';' comment from a line.

    A ';' only starts a comment outside of double quotes, single quotes and
    /regex/ literals. Each delimiter opens or closes its region only while no
    other region is open. A backslash escapes the following character.

    Known limitation: any unescaped '/' outside quotes toggles the regex region,
    so ordinary text with a lone slash can hide a later ';' comment.
    """
    in_double = False
    in_single = False
    in_regex = False
    escaped = False

    for index, char in enumerate(line):
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue

        if char == '"' and not (in_single or in_regex):
            in_double = not in_double
        elif char == "'" and not (in_double or in_regex):
            in_single = not in_single
        elif char == "/" and not (in_double or in_single):
            in_regex = not in_regex
        elif char == ";" and not (in_double or in_single or in_regex):
            return line[:index].strip()

    return line.strip()


def _is_full_line_comment(line: str) -> bool:
    return line.startswith(FULL_LINE_COMMENT_PREFIXES)


def _section_name(line: str) -> str | None:
    if line.startswith("[") and line.endswith("]"):
        return line[1:-1].strip()
    return None


def split_front_matter(content: list[str]) -> tuple[list[str], list[str]]:
    """Splits section content at the first separator line into (front matter, body)."""
    for index, line in enumerate(content):
        if SEPARATOR_PATTERN.match(line):
            return content[:index], content[index + 1 :]
    return [], list(content)


def tokenize_document(text: str) -> Document:
    """Tokenizes the subscriptions file text into a Document."""
    document = Document()
    current: list[str] | None = None
    sections_content: list[tuple[str, list[str]]] = []

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or _is_full_line_comment(line):
            continue

        line = strip_inline_comment(line)
        if not line:
            continue

        name = _section_name(line)
        if name is not None:
            current = []
            sections_content.append((name, current))
        elif current is not None:
            current.append(line)
        else:
            document.preamble.append(line)

    for name, content in sections_content:
        front_matter, body = split_front_matter(content)
        document.sections.append(Section(name=name, front_matter=front_matter, body=body))

    return document
