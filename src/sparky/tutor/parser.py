"""Turn a raw tutor reply into typed content blocks.

Two passes:

1. ``extract_quiz`` pulls an embedded ```json {"quiz": {...}}``` fence out of
   the text. Anything malformed leaves the text untouched and yields no quiz.
2. ``parse_blocks`` splits the remaining text on fenced code, then scans each
   prose segment line by line (``classify_line``) into headings, quotes,
   rules, lists and paragraphs. Code is kept verbatim.

An opening fence with no closing fence turns the rest of the input into code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from sparky import logger as logger_mod
from sparky.llm._json import parse_json, validate_json
from sparky.llm.errors import LLMValidationError

from .messages import QUIZ_PAYLOAD_SCHEMA, QuizPayload

log = logger_mod.get_logger()

QUIZ_FENCE_RE = re.compile(r"```json\s*(\{.*?\})\s*```", re.S)

# Paired fences first; an unpaired opening fence runs to the end of input.
CODE_FENCE_RE = re.compile(r"(```.*?```|```.*\Z)", re.S)
FENCE_OPEN_RE = re.compile(r"\A```(?:(\w+)\n)?")
FENCE_CLOSE_RE = re.compile(r"```\Z")

HEADING_RE = re.compile(r"^(#{1,4})\s+(.*)")
BLOCKQUOTE_RE = re.compile(r"^>\s+(.*)")
RULE_RE = re.compile(r"^(---|___|\*\*\*)$")
UNORDERED_RE = re.compile(r"^\s*[-*]\s+(.*)")
ORDERED_RE = re.compile(r"^\s*\d+\.\s+(.*)")

INLINE_RE = re.compile(r"(\*\*.*?\*\*|\*.*?\*|`.*?`)")


# ---------------------------------------------------------------------------
# Quiz extraction
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QuizExtraction:
    text: str
    quiz: Optional[QuizPayload] = None


def extract_quiz(text: str) -> QuizExtraction:
    match = QUIZ_FENCE_RE.search(text)
    if not match:
        return QuizExtraction(text=text)

    try:
        data = parse_json(match.group(1))
        if not isinstance(data, dict) or not data.get("quiz"):
            return QuizExtraction(text=text)
        validate_json(data["quiz"], QUIZ_PAYLOAD_SCHEMA)
    except LLMValidationError as e:
        log.debug(f"Ignoring malformed quiz block: {e}")
        return QuizExtraction(text=text)

    remaining = (text[: match.start()] + text[match.end() :]).strip()
    return QuizExtraction(text=remaining, quiz=QuizPayload.from_dict(data["quiz"]))


# ---------------------------------------------------------------------------
# Inline formatting
# ---------------------------------------------------------------------------


class SpanKind(str, Enum):
    TEXT = "text"
    STRONG = "strong"
    EM = "em"
    CODE = "code"


@dataclass(frozen=True)
class InlineSpan:
    kind: SpanKind
    text: str


def parse_inline(line: str) -> tuple[InlineSpan, ...]:
    """Split a line into bold / italic / inline-code / literal spans."""

    spans: list[InlineSpan] = []
    # re.split with one group alternates literal text and matched tokens.
    for i, part in enumerate(INLINE_RE.split(line)):
        if i % 2 == 0:
            if part:
                spans.append(InlineSpan(SpanKind.TEXT, part))
        elif part.startswith("**") and part.endswith("**") and len(part) >= 4:
            spans.append(InlineSpan(SpanKind.STRONG, part[2:-2]))
        elif part.startswith("*"):
            spans.append(InlineSpan(SpanKind.EM, part[1:-1]))
        else:
            spans.append(InlineSpan(SpanKind.CODE, part[1:-1]))
    return tuple(spans)


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------


class LineKind(str, Enum):
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    RULE = "rule"
    UNORDERED_ITEM = "unordered_item"
    ORDERED_ITEM = "ordered_item"
    BLANK = "blank"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Line:
    kind: LineKind
    content: str = ""
    level: int = 0


def classify_line(line: str) -> Line:
    """Classify one prose line. Order matters; the last case catches everything."""

    m = HEADING_RE.match(line)
    if m:
        return Line(LineKind.HEADING, m.group(2), level=len(m.group(1)))
    m = BLOCKQUOTE_RE.match(line)
    if m:
        return Line(LineKind.BLOCKQUOTE, m.group(1))
    if RULE_RE.match(line):
        return Line(LineKind.RULE)
    m = UNORDERED_RE.match(line)
    if m:
        return Line(LineKind.UNORDERED_ITEM, m.group(1))
    m = ORDERED_RE.match(line)
    if m:
        return Line(LineKind.ORDERED_ITEM, m.group(1))
    if not line.strip():
        return Line(LineKind.BLANK)
    return Line(LineKind.PARAGRAPH, line)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


class BlockKind(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BLOCKQUOTE = "blockquote"
    RULE = "rule"
    UNORDERED_LIST = "unordered_list"
    ORDERED_LIST = "ordered_list"
    CODE = "code"


@dataclass(frozen=True)
class ListItem:
    text: str
    spans: tuple[InlineSpan, ...]


@dataclass(frozen=True)
class ContentBlock:
    kind: BlockKind
    text: str = ""
    spans: tuple[InlineSpan, ...] = ()
    level: int = 0
    items: tuple[ListItem, ...] = ()
    language: Optional[str] = None
    # A paragraph-break spacer sits directly before this block.
    spaced: bool = False


_LIST_KINDS = {
    LineKind.UNORDERED_ITEM: BlockKind.UNORDERED_LIST,
    LineKind.ORDERED_ITEM: BlockKind.ORDERED_LIST,
}


class _SegmentScanner:
    """Line scanner for one prose segment.

    Holds at most one open list; any line that is not an item of the same
    list type closes it first.
    """

    def __init__(self) -> None:
        self.blocks: list[ContentBlock] = []
        self._list_kind: Optional[BlockKind] = None
        self._items: list[ListItem] = []
        self._spacer_pending = False
        self._prev_blank = True

    def _emit(self, block: ContentBlock) -> None:
        if self._spacer_pending:
            block = replace(block, spaced=True)
            self._spacer_pending = False
        self.blocks.append(block)

    def flush_list(self) -> None:
        if self._list_kind is None:
            return
        self._emit(ContentBlock(kind=self._list_kind, items=tuple(self._items)))
        self._list_kind = None
        self._items = []

    def feed(self, line: Line) -> None:
        if line.kind in _LIST_KINDS:
            kind = _LIST_KINDS[line.kind]
            if self._list_kind is not None and self._list_kind != kind:
                self.flush_list()
            self._list_kind = kind
            self._items.append(ListItem(line.content, parse_inline(line.content)))
        else:
            self.flush_list()
            if line.kind == LineKind.HEADING:
                self._emit(
                    ContentBlock(
                        kind=BlockKind.HEADING,
                        text=line.content,
                        spans=parse_inline(line.content),
                        level=line.level,
                    )
                )
            elif line.kind == LineKind.BLOCKQUOTE:
                self._emit(
                    ContentBlock(
                        kind=BlockKind.BLOCKQUOTE,
                        text=line.content,
                        spans=parse_inline(line.content),
                    )
                )
            elif line.kind == LineKind.RULE:
                self._emit(ContentBlock(kind=BlockKind.RULE))
            elif line.kind == LineKind.PARAGRAPH:
                self._emit(
                    ContentBlock(
                        kind=BlockKind.PARAGRAPH,
                        text=line.content,
                        spans=parse_inline(line.content),
                    )
                )
            elif self.blocks and not self._prev_blank:
                # blank line: no leading spacers, no runs of spacers
                self._spacer_pending = True
        self._prev_blank = line.kind == LineKind.BLANK

    def finish(self) -> list[ContentBlock]:
        self.flush_list()
        return self.blocks


def _code_block(fence: str) -> ContentBlock:
    m = FENCE_OPEN_RE.match(fence)
    language = m.group(1) if m else None
    body = FENCE_OPEN_RE.sub("", fence, count=1)
    body = FENCE_CLOSE_RE.sub("", body, count=1)
    return ContentBlock(kind=BlockKind.CODE, text=body, language=language)


def parse_segment(segment: str) -> list[ContentBlock]:
    scanner = _SegmentScanner()
    for raw in segment.strip().split("\n"):
        scanner.feed(classify_line(raw))
    return scanner.finish()


def parse_blocks(text: str) -> list[ContentBlock]:
    blocks: list[ContentBlock] = []
    for segment in CODE_FENCE_RE.split(text):
        if not segment:
            continue
        if segment.startswith("```"):
            blocks.append(_code_block(segment))
        else:
            blocks.extend(parse_segment(segment))
    return blocks


@dataclass(frozen=True)
class ParsedReply:
    text: str
    blocks: list[ContentBlock]
    quiz: Optional[QuizPayload] = None


def parse_reply(text: str) -> ParsedReply:
    extraction = extract_quiz(text)
    return ParsedReply(
        text=extraction.text,
        blocks=parse_blocks(extraction.text),
        quiz=extraction.quiz,
    )
