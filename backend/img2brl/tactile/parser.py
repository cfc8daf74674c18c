"""Parser for the converter's text protocol.

    document := "Width: " uint EOL "Height: " uint EOL EOL payload EOI
    EOL      := "\\r\\n" | "\\n" | "\\r"

The header is strict: every token after the leading keyword is mandatory and
nothing is guessed or defaulted. The payload is everything after the blank
line, taken verbatim and possibly empty.
"""

from __future__ import annotations

from img2brl.models.failures import MalformedTactileOutput
from img2brl.models.results import TactileResult

_WIDTH = b"Width: "
_HEIGHT = b"Height: "
_DIGITS = frozenset(b"0123456789")


class _Cursor:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def literal(self, text: bytes) -> None:
        if not self.data.startswith(text, self.pos):
            raise MalformedTactileOutput(f"expected {text.decode()!r}", self.pos)
        self.pos += len(text)

    def uint(self) -> int:
        start = self.pos
        while self.pos < len(self.data) and self.data[self.pos] in _DIGITS:
            self.pos += 1
        if self.pos == start:
            raise MalformedTactileOutput("expected unsigned integer", start)
        return int(self.data[start:self.pos])

    def eol(self) -> None:
        if self.data.startswith(b"\r\n", self.pos):
            self.pos += 2
        elif self.data.startswith((b"\n", b"\r"), self.pos):
            self.pos += 1
        else:
            raise MalformedTactileOutput("expected line end", self.pos)

    def rest(self) -> bytes:
        payload = self.data[self.pos:]
        self.pos = len(self.data)
        return payload


def parse_tactile(data: bytes) -> TactileResult:
    """Parse converter output into a ``TactileResult``.

    Raises:
        MalformedTactileOutput: on any deviation from the header grammar.
    """
    cur = _Cursor(bytes(data))
    cur.literal(_WIDTH)
    width = cur.uint()
    cur.eol()
    cur.literal(_HEIGHT)
    height = cur.uint()
    cur.eol()
    cur.eol()
    return TactileResult(width_cells=width, height_cells=height, payload=cur.rest())
