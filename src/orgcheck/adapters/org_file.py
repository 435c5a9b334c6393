"""Org-mode outline file adapter."""

import logging
import os
import re
from pathlib import Path

from orgcheck.core.tasks import OutlineEntry, SourceLocator

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS = ("TODO", "DONE")

HEADING_RE = re.compile(r"^(\*+)\s+(.*?)\s*$")
TAGS_RE = re.compile(r"(?:^|\s+)(:(?:[\w@#%]+:)+)$")
PRIORITY_RE = re.compile(r"^\[#[A-Za-z0-9]\]\s*")
PLANNING_RE = re.compile(r"\b(SCHEDULED|DEADLINE):\s*(<[^>]*>)")
PLANNING_LINE_RE = re.compile(r"^\s*(?:(?:SCHEDULED|DEADLINE|CLOSED):\s*[<\[][^>\]]*[>\]]\s*)+$")
PROPERTY_RE = re.compile(r"^\s*:([^:\s]+):(?:\s+(.*?))?\s*$")
TODO_SETTING_RE = re.compile(r"^#\+(?:SEQ_|TYP_)?TODO:\s*(.*)$", re.IGNORECASE)
FILETAGS_RE = re.compile(r"^#\+FILETAGS:\s*(.*)$", re.IGNORECASE)


def parse_tags(text: str) -> list[str]:
    """Split ":a:b:" into ["a", "b"]."""
    return [t for t in text.strip().split(":") if t]


def parse_keywords(lines: list[str]) -> tuple[str, ...]:
    """
    Collect TODO keywords from #+TODO lines.

    "#+TODO: TODO NEXT(n) | DONE(d)" gives ("TODO", "NEXT", "DONE").
    Falls back to TODO/DONE when the file declares none.
    """
    keywords = []
    for line in lines:
        match = TODO_SETTING_RE.match(line)
        if not match:
            continue
        for word in match.group(1).split():
            if word == "|":
                continue
            word = word.split("(")[0]
            if word and word not in keywords:
                keywords.append(word)
    return tuple(keywords) or DEFAULT_KEYWORDS


def parse_heading(body: str, keywords: tuple[str, ...]) -> tuple[str | None, str, list[str]]:
    """Split a heading body into (keyword, title, own tags)."""
    tags = []
    tag_match = TAGS_RE.search(body)
    if tag_match:
        tags = parse_tags(tag_match.group(1))
        body = body[: tag_match.start()]

    keyword = None
    first, _, rest = body.partition(" ")
    if first in keywords:
        keyword = first
        body = rest

    body = PRIORITY_RE.sub("", body.strip())
    return keyword, body.strip(), tags


def parse_org(text: str, path: str) -> list[OutlineEntry]:
    """Parse Org markup into outline entries, one per heading."""
    lines = text.splitlines()
    keywords = parse_keywords(lines)

    file_tags = []
    for line in lines:
        match = FILETAGS_RE.match(line)
        if match:
            file_tags.extend(parse_tags(match.group(1)))

    entries = []
    ancestors: list[tuple[int, list[str]]] = []

    for index, line in enumerate(lines):
        match = HEADING_RE.match(line)
        if not match:
            continue

        level = len(match.group(1))
        keyword, title, tags = parse_heading(match.group(2), keywords)

        while ancestors and ancestors[-1][0] >= level:
            ancestors.pop()
        inherited = list(file_tags)
        for _, ancestor_tags in ancestors:
            inherited.extend(ancestor_tags)
        ancestors.append((level, tags))

        entry = OutlineEntry(
            heading=title,
            keyword=keyword,
            tags=tags,
            inherited_tags=inherited,
            locator=SourceLocator(path=path, line=index + 1),
        )

        cursor = index + 1
        if cursor < len(lines) and PLANNING_LINE_RE.match(lines[cursor]):
            planning = dict(PLANNING_RE.findall(lines[cursor]))
            entry.scheduled = planning.get("SCHEDULED")
            entry.deadline = planning.get("DEADLINE")
            cursor += 1

        if cursor < len(lines) and lines[cursor].strip().upper() == ":PROPERTIES:":
            for prop_line in lines[cursor + 1 :]:
                if prop_line.strip().upper() == ":END:" or HEADING_RE.match(prop_line):
                    break
                prop = PROPERTY_RE.match(prop_line)
                if prop:
                    entry.properties[prop.group(1).upper()] = prop.group(2) or ""

        entries.append(entry)

    return entries


class OrgFileSource:
    """
    Org file reader.

    Implements OutlineSource protocol. Unreadable files are logged and
    yield no entries.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def exists(self, path: str) -> bool:
        """Check that a file is present and readable."""
        resolved = Path(path).expanduser()
        return resolved.is_file() and os.access(resolved, os.R_OK)

    def entries(self, path: str) -> list[OutlineEntry]:
        """Read every heading in a file. Returns [] if the file can't be read."""
        resolved = Path(path).expanduser().resolve()
        try:
            text = resolved.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable file {resolved}: {e}")
            return []
        entries = parse_org(text, str(resolved))
        logger.debug(f"Read {len(entries)} headings from {resolved}")
        return entries
