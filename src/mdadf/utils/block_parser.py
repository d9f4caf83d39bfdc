"""Line classification and grouping of consecutive lines into block-level groups."""

from dataclasses import dataclass, field
from enum import Enum
import logging
import re

from mdadf.constants import CODE_FENCE, LOGGER_NAME, GroupKind, LineKind

logger = logging.getLogger(LOGGER_NAME)

HEADER_PATTERN = re.compile(r'^(#+)\s')
BULLET_PATTERN = re.compile(r'^(\s*)- (.*)$')
ORDERED_PATTERN = re.compile(r'^(\s*)\d+\.\s(.*)$')
BLOCKQUOTE_PATTERN = re.compile(r'^> (.*)$')
RULE_PATTERN = re.compile(r'^-{3,}$')

_EXTENDABLE_GROUPS: dict[LineKind, GroupKind] = {
    LineKind.BULLET: GroupKind.BULLET_LIST,
    LineKind.ORDERED: GroupKind.ORDERED_LIST,
    LineKind.BLOCKQUOTE: GroupKind.BLOCKQUOTE,
    LineKind.TABLE_ROW: GroupKind.TABLE,
}

@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    line: str
    content: str = ''
    level: int | None = None
    language: str | None = None


@dataclass
class LineGroup:
    """A run of lines that converts into a single block node."""

    kind: GroupKind
    lines: list[str] = field(default_factory=list)
    level: int | None = None
    language: str | None = None
    closed: bool = True


class GrouperState(Enum):
    NORMAL = 'normal'
    IN_FENCE = 'in-fence'


def leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(' '))


def classify_line(line: str, in_fence: bool = False) -> ClassifiedLine:
    """Classifies a single markdown line by its block-level category.

    Args:
        line: the raw line, without its line terminator.
        in_fence: whether an unterminated code fence is currently open.

    Returns:
        The classification together with the data extracted from the line.
    """

    is_fence = line.startswith(CODE_FENCE)

    if in_fence:
        if is_fence:
            return ClassifiedLine(LineKind.FENCE_CLOSE, line)
        return ClassifiedLine(LineKind.FENCE_CONTENT, line, content=line)

    if is_fence:
        language = line[len(CODE_FENCE) :].strip()
        return ClassifiedLine(LineKind.FENCE_OPEN, line, language=language or None)

    if match := HEADER_PATTERN.match(line):
        level = len(match.group(1))
        return ClassifiedLine(LineKind.HEADER, line, content=line[level:].strip(), level=level)

    if match := BULLET_PATTERN.match(line):
        return ClassifiedLine(LineKind.BULLET, line, content=match.group(2).strip())

    if match := ORDERED_PATTERN.match(line):
        return ClassifiedLine(LineKind.ORDERED, line, content=match.group(2).strip())

    if match := BLOCKQUOTE_PATTERN.match(line):
        return ClassifiedLine(LineKind.BLOCKQUOTE, line, content=match.group(1).strip())

    if RULE_PATTERN.match(line):
        return ClassifiedLine(LineKind.RULE, line)

    if '|' in line and not line.startswith('>'):
        return ClassifiedLine(LineKind.TABLE_ROW, line)

    if not line.strip():
        return ClassifiedLine(LineKind.BLANK, line)

    return ClassifiedLine(LineKind.PARAGRAPH, line, content=line)


def _extends(previous: LineGroup | None, classified: ClassifiedLine) -> bool:
    if previous is None:
        return False

    if classified.kind is LineKind.PARAGRAPH:
        return previous.kind is GroupKind.PARAGRAPH

    group_kind = _EXTENDABLE_GROUPS.get(classified.kind)
    if group_kind is None:
        return False
    return previous.kind is group_kind


def _start_group(classified: ClassifiedLine) -> LineGroup:
    if classified.kind is LineKind.HEADER:
        return LineGroup(GroupKind.HEADER, [classified.content], level=classified.level)
    if classified.kind is LineKind.RULE:
        return LineGroup(GroupKind.RULE)
    if classified.kind is LineKind.PARAGRAPH:
        return LineGroup(GroupKind.PARAGRAPH, [classified.content])
    if classified.kind is LineKind.BLOCKQUOTE:
        return LineGroup(GroupKind.BLOCKQUOTE, [classified.content])
    return LineGroup(_EXTENDABLE_GROUPS[classified.kind], [classified.line])


def group_lines(lines: list[str]) -> list[LineGroup]:
    """Groups consecutive lines of the same kind together.

    Blank lines end a group without starting one. A code block group that never receives its closing fence is
    dropped.
    """

    groups: list[LineGroup] = []
    state = GrouperState.NORMAL
    # The group the next line may extend; reset by blank lines and by single-line groups.
    extendable: LineGroup | None = None

    for line in lines:
        classified = classify_line(line, in_fence=state is GrouperState.IN_FENCE)

        if classified.kind is LineKind.FENCE_OPEN:
            groups.append(LineGroup(GroupKind.CODE_BLOCK, language=classified.language, closed=False))
            state = GrouperState.IN_FENCE
            extendable = None
        elif classified.kind is LineKind.FENCE_CONTENT:
            groups[-1].lines.append(classified.content)
        elif classified.kind is LineKind.FENCE_CLOSE:
            groups[-1].closed = True
            state = GrouperState.NORMAL
        elif classified.kind is LineKind.BLANK:
            extendable = None
        elif classified.kind in (LineKind.HEADER, LineKind.RULE):
            groups.append(_start_group(classified))
            extendable = None
        elif _extends(extendable, classified):
            if classified.kind in (LineKind.PARAGRAPH, LineKind.BLOCKQUOTE):
                extendable.lines.append(classified.content)  # type: ignore[union-attr]
            else:
                extendable.lines.append(classified.line)  # type: ignore[union-attr]
        else:
            extendable = _start_group(classified)
            groups.append(extendable)

    unterminated = [g for g in groups if g.kind is GroupKind.CODE_BLOCK and not g.closed]
    if unterminated:
        logger.debug(f'Dropping {len(unterminated)} unterminated code block(s)')
        groups = [g for g in groups if g.closed]

    return groups
