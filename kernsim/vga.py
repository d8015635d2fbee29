"""An 80x25 VGA text-mode screen held in memory."""

from __future__ import annotations

from enum import IntEnum

VGA_MEM = 0xB8000
VGA_COL = 80
VGA_ROW = 25
TAB_WIDTH = 4


class Colour(IntEnum):
    BLACK = 0
    BLUE = 1
    GREEN = 2
    CYAN = 3
    RED = 4
    MAGENTA = 5
    BROWN = 6
    LIGHT_GREY = 7
    DARK_GREY = 8
    LIGHT_BLUE = 9
    LIGHT_GREEN = 10
    LIGHT_CYAN = 11
    LIGHT_RED = 12
    LIGHT_MAGENTA = 13
    LIGHT_BROWN = 14
    WHITE = 15


def attribute(fg: int, bg: int) -> int:
    """The attribute byte for a foreground and background colour."""
    return (int(fg) | int(bg) << 4) & 0xFF


def cell(char: str | int, colour: int) -> int:
    """The 16-bit screen cell for a character and an attribute byte."""
    code = char if isinstance(char, int) else ord(char)
    if not 0 <= code <= 0xFF:
        raise ValueError(f"character {char!r} does not fit in a screen cell")
    return code | (colour & 0xFF) << 8


class VgaText:
    """Text screen with a cursor that wraps and scrolls."""

    def __init__(self, fg: Colour = Colour.WHITE, bg: Colour = Colour.BLACK) -> None:
        self.fg = fg
        self.bg = bg
        self.row = 0
        self.col = 0
        self.cells = [0] * (VGA_ROW * VGA_COL)
        self.clear()

    def _blank(self) -> int:
        return cell(" ", attribute(self.fg, self.bg))

    def clear(self) -> None:
        """Fill the screen with spaces; the cursor stays where it is."""
        self.cells[:] = [self._blank()] * (VGA_ROW * VGA_COL)

    def setc(self, c: str | int, row: int, col: int) -> None:
        """Put a character at a position in the current colours."""
        if not (0 <= row < VGA_ROW and 0 <= col < VGA_COL):
            raise IndexError(f"position ({row}, {col}) is off screen")
        self.cells[row * VGA_COL + col] = cell(c, attribute(self.fg, self.bg))

    def scroll(self, n: int) -> None:
        """Move the contents up ``n`` lines, blanking the lines freed at the bottom."""
        if n < 0:
            raise ValueError("cannot scroll by a negative number of lines")
        shift = min(n, VGA_ROW) * VGA_COL
        if shift == 0:
            return
        self.cells[:] = self.cells[shift:] + [self._blank()] * shift
        self.row = max(self.row - min(n, VGA_ROW), 0)

    def putc(self, c: str) -> None:
        """Write one character at the cursor and advance it."""
        if c == "\n":
            self.row += 1
            self.col = 0
        elif c == "\t":
            self.col += TAB_WIDTH
            if self.col >= VGA_COL:
                self.row += 1
                self.col = 0
        else:
            self.setc(c, self.row, self.col)
            self.col += 1

        if self.col >= VGA_COL:
            self.row += 1
            self.col = 0

        if self.row >= VGA_ROW:
            self.scroll(self.row - VGA_ROW + 1)
            self.col = 0

    def print(self, text: str) -> None:
        """Write every character of ``text`` up to any NUL."""
        for c in text.split("\0", 1)[0]:
            self.putc(c)

    def line(self, row: int) -> str:
        """The characters shown on one row."""
        if not 0 <= row < VGA_ROW:
            raise IndexError(f"row {row} is off screen")
        start = row * VGA_COL
        return "".join(chr(value & 0xFF) for value in self.cells[start : start + VGA_COL])