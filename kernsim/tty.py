"""Formatted output in the kernel's small printf dialect."""

from __future__ import annotations

from typing import Any, Iterator

from kernsim.fs import FileSystem

FORMAT_MARK = "%"
_UINT_MASK = 0xFFFFFFFF


def format_integer(num: int, base: int) -> str:
    """Digits of ``num`` taken as a 32-bit unsigned value, upper-case letters above 9."""
    if not 2 <= base <= 36:
        raise ValueError(f"base must be between 2 and 36, got {base}")
    num &= _UINT_MASK
    if num == 0:
        return "0"
    digits = []
    while num:
        num, remainder = divmod(num, base)
        digits.append(chr(ord("0") + remainder) if remainder < 10 else chr(ord("A") + remainder - 10))
    return "".join(reversed(digits))


def _next_arg(values: Iterator[Any], spec: str) -> Any:
    try:
        return next(values)
    except StopIteration:
        raise ValueError(f"no argument left for %{spec}") from None


def _char(value: Any) -> str:
    if isinstance(value, int):
        return chr(value & 0xFF)
    return str(value)[:1]


def format_text(text: str, *args: Any) -> str:
    """Expand ``%d``, ``%x``, ``%c``, ``%s`` and ``%%``; other specifiers vanish."""
    values = iter(args)
    chars = iter(text.split("\0", 1)[0])
    out: list[str] = []
    for ch in chars:
        if ch != FORMAT_MARK:
            out.append(ch)
            continue
        spec = next(chars, "")
        if spec == "d":
            out.append(format_integer(int(_next_arg(values, spec)), 10))
        elif spec == "x":
            out.append(format_integer(int(_next_arg(values, spec)), 16))
        elif spec == "c":
            out.append(_char(_next_arg(values, spec)))
        elif spec == "s":
            out.append(str(_next_arg(values, spec)).split("\0", 1)[0])
        elif spec == FORMAT_MARK:
            out.append(FORMAT_MARK)
    return "".join(out)


def fprintf(fs: FileSystem, fh: int, text: str, *args: Any) -> None:
    """Format ``text`` and write it to the open handle ``fh``."""
    fs.write(fh, format_text(text, *args).encode("latin-1"))