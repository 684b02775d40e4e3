import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

_WORD_RE = re.compile(r"[\w$]+")
# Line breaks as editors count them: "\n", "\r\n" or a lone "\r"
_LINE_BREAK_RE = re.compile(r"(?<=\n)|(?<=\r)(?!\n)")


@dataclass(frozen=True, order=True)
class Position:
    line: int  # 0-based
    character: int  # 0-based, code points into the line


@dataclass(frozen=True)
class Location:
    path: str
    position: Position


@dataclass(frozen=True)
class TextDocument:
    """Immutable snapshot of an editor buffer."""

    path: str
    text: str
    _lines: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Line ends stay attached so byte offsets account for "\r\n" as well as "\n"
        object.__setattr__(self, "_lines", tuple(_LINE_BREAK_RE.split(self.text)))

    @property
    def source(self) -> bytes:
        return self.text.encode("utf-8")

    def line_text(self, line: int) -> str:
        if line < 0 or line >= len(self._lines):
            return ""
        return self._lines[line].rstrip("\r\n")

    def offset_at(self, position: Position) -> int:
        """UTF-8 byte offset of `position`, clamped to the document."""
        if position.line >= len(self._lines):
            return len(self.source)
        prefix = "".join(self._lines[: position.line])
        line = self.line_text(position.line)
        column = min(position.character, len(line))
        return len(prefix.encode("utf-8")) + len(line[:column].encode("utf-8"))

    def word_range_at(self, position: Position) -> Optional[Tuple[Position, Position]]:
        line = self.line_text(position.line)
        for match in _WORD_RE.finditer(line):
            if match.start() <= position.character <= match.end():
                return (
                    Position(position.line, match.start()),
                    Position(position.line, match.end()),
                )
        return None

    def word_at(self, position: Position) -> Optional[str]:
        word_range = self.word_range_at(position)
        if word_range is None:
            return None
        start, end = word_range
        return self.line_text(position.line)[start.character:end.character]
