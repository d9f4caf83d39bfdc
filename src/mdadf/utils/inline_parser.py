"""Inline formatting: span extraction, overlap resolution and text node assembly."""

from dataclasses import dataclass
from functools import reduce
import logging
import re

from mdadf.constants import LOGGER_NAME, MatchKind
from mdadf.exceptions import InlineParsingException
from mdadf.models import Mark, Text

logger = logging.getLogger(LOGGER_NAME)

FORMATTING_PATTERNS: dict[MatchKind, re.Pattern] = {
    # NOTE: bold stops at the first closing `**`, so `**a*b**c**` yields `a*b`.
    MatchKind.BOLD: re.compile(r'\*\*(.+?)\*\*'),
    MatchKind.ITALIC: re.compile(r'(?<!\*)\*([^*]+)\*(?!\*)'),
    MatchKind.CODE: re.compile(r'`([^`]+)`'),
    MatchKind.CUSTOM_LINK: re.compile(r'\[([^\]]+)\]\(([^)]+)\)'),
    MatchKind.URL: re.compile(r'https?://[^\s]+'),
    MatchKind.STRIKE: re.compile(r'~~([^~]+)~~'),
}

MATCH_PRECEDENCE: tuple[MatchKind, ...] = (
    MatchKind.BOLD,
    MatchKind.CODE,
    MatchKind.CUSTOM_LINK,
    MatchKind.URL,
    MatchKind.STRIKE,
    MatchKind.ITALIC,
)
"""Order in which per-kind matches are concatenated; decides ties between spans starting at the same offset."""


@dataclass(frozen=True)
class Match:
    """A recognized inline formatting span, prior to being turned into a text node."""

    start: int
    end: int
    kind: MatchKind
    text: str
    href: str | None = None


def find_pattern_matches(text: str, kind: MatchKind) -> list[Match]:
    """Finds every non-overlapping span of a single formatting kind in `text`."""

    if not text or not text.strip():
        return []

    matches = []
    for found in FORMATTING_PATTERNS[kind].finditer(text):
        if kind is MatchKind.URL:
            inner_text = href = found.group(0)
        elif kind is MatchKind.CUSTOM_LINK:
            inner_text, href = found.group(1), found.group(2)
        else:
            inner_text, href = found.group(1), None
        matches.append(
            Match(start=found.start(), end=found.end(), kind=kind, text=inner_text, href=href)
        )
    return matches


def remove_overlapping_matches(matches: list[Match]) -> list[Match]:
    """Keeps a match only when it starts at or after the end of the last kept match.

    Args:
        matches: matches sorted by their start offset.

    Returns:
        A non-overlapping, position-ordered list of matches.
    """

    def keep_if_disjoint(kept: list[Match], match: Match) -> list[Match]:
        if not kept or match.start >= kept[-1].end:
            return [*kept, match]
        return kept

    return reduce(keep_if_disjoint, matches, [])


def extract_formatting_patterns(text: str) -> list[Match]:
    """Extracts all formatting spans from `text`, sorted by position with overlaps removed."""

    if not text or not text.strip():
        return []

    candidates = [match for kind in MATCH_PRECEDENCE for match in find_pattern_matches(text, kind)]
    # sorted() is stable: spans starting at the same offset keep the precedence order.
    return remove_overlapping_matches(sorted(candidates, key=lambda match: match.start))


def _mark_for(match: Match) -> Mark:
    if match.kind is MatchKind.BOLD:
        return Mark.strong()
    if match.kind is MatchKind.ITALIC:
        return Mark.em()
    if match.kind is MatchKind.CODE:
        return Mark.code()
    if match.kind is MatchKind.STRIKE:
        return Mark.strike()
    if match.kind in (MatchKind.CUSTOM_LINK, MatchKind.URL):
        return Mark.link(match.href or match.text)
    raise InlineParsingException(f'Unsupported match kind: {match.kind}', extra={'match': match})


def build_content_nodes(text: str, matches: list[Match]) -> list[Text]:
    """Interleaves plain text runs and formatted spans into an ordered list of text nodes.

    Args:
        text: the fragment the matches were found in.
        matches: non-overlapping matches in position order.

    Returns:
        The text nodes covering the fragment. An empty list when there are no matches and the fragment is blank.
    """

    if not matches:
        return [Text(text)] if text and text.strip() else []

    def append_match(accumulator: tuple[list[Text], int], match: Match) -> tuple[list[Text], int]:
        nodes, cursor = accumulator
        if match.start < cursor or match.end > len(text):
            raise InlineParsingException(
                'Match falls outside the unconsumed part of the fragment.',
                extra={'match': match, 'cursor': cursor, 'length': len(text)},
            )
        if cursor < match.start:
            nodes = [*nodes, Text(text[cursor : match.start])]
        return [*nodes, Text(match.text, marks=(_mark_for(match),))], match.end

    nodes, cursor = reduce(append_match, matches, ([], 0))
    if cursor < len(text):
        nodes = [*nodes, Text(text[cursor:])]
    return nodes


def parse_inline_formatting(text: str) -> list[Text]:
    """Parses inline markdown formatting (bold, italic, code, strikethrough, links) in `text`.

    Returns:
        A list of text nodes with their formatting marks.
    """

    if not text or not text.strip():
        return []
    return build_content_nodes(text, extract_formatting_patterns(text))
