"""
Reply formatting: split a reply into prose and fenced-code segments and render
them as styled rich Text.

Segmentation is pure and never touches a terminal. Styling goes through a
Styler so the segmentation can be exercised with PlainStyler.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from rich.syntax import Syntax
from rich.text import Text

DEFAULT_LANGUAGE = "plaintext"
CODE_BACKGROUND = "#333333"
CODE_THEME = "monokai"

FENCE_RE = re.compile(r"^```([^\s`]*)\s*$")


class SegmentKind(str, Enum):
    PROSE = "prose"
    CODE = "code"


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    lines: tuple[str, ...]
    language: Optional[str] = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def fence_language(line: str) -> Optional[str]:
    """Return the tag of a fence line ('' for a bare fence), or None if the line is not a fence."""
    match = FENCE_RE.match(line)
    if match is None:
        return None
    return match.group(1)


def segment(text: str) -> list[Segment]:
    """
    Classify every line of ``text`` as prose or code.

    A fence line toggles the code state and is dropped from the output. The
    opening fence sets the language; an unterminated fence keeps the rest of
    the text as code.
    """
    segments: list[Segment] = []
    current: list[str] = []
    in_code = False
    language: Optional[str] = None

    def flush() -> None:
        if not current:
            return
        if in_code:
            segments.append(Segment(SegmentKind.CODE, tuple(current), language))
        else:
            segments.append(Segment(SegmentKind.PROSE, tuple(current)))
        current.clear()

    for line in text.split("\n"):
        tag = fence_language(line)
        if tag is None:
            current.append(line)
            continue

        flush()
        in_code = not in_code
        language = (tag or DEFAULT_LANGUAGE) if in_code else None

    flush()
    return segments


class Styler(Protocol):
    def prose(self, line: str) -> Text: ...

    def code(self, line: str, language: str) -> Text: ...


class PlainStyler:
    """Emits every line as unstyled text."""

    def prose(self, line: str) -> Text:
        return Text(line)

    def code(self, line: str, language: str) -> Text:
        return Text(line)


class SyntaxStyler:
    """
    Highlights code lines with pygments through rich.

    Unknown languages get no lexer from rich and come back as plain text on
    the code background, so rendering never fails on a bad tag.
    """

    def __init__(self, theme: str = CODE_THEME, background: str = CODE_BACKGROUND):
        self.theme = theme
        self.background = background

    def prose(self, line: str) -> Text:
        return Text(line)

    def code(self, line: str, language: str) -> Text:
        syntax = Syntax(line, language, theme=self.theme, background_color=self.background)
        highlighted = syntax.highlight(line)
        # pygments terminates the token stream with a newline
        if highlighted.plain.endswith("\n") and not line.endswith("\n"):
            highlighted.right_crop(1)
        highlighted.stylize(f"on {self.background}")
        return highlighted


def render_segments(segments: list[Segment], styler: Styler) -> Text:
    rendered: list[Text] = []
    for seg in segments:
        for line in seg.lines:
            if seg.kind is SegmentKind.CODE:
                rendered.append(styler.code(line, seg.language or DEFAULT_LANGUAGE))
            else:
                rendered.append(styler.prose(line))
    return Text("\n").join(rendered)


def format_response(text: str, styler: Optional[Styler] = None) -> Text:
    """Render a reply for display. Deterministic, no I/O."""
    return render_segments(segment(text), styler or SyntaxStyler())
