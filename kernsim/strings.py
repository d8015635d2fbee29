"""String helpers with the kernel's semantics."""

from __future__ import annotations

from typing import Iterator


def tokenize(text: str, delimiters: str) -> Iterator[str]:
    """Yield the runs of ``text`` between any of the ``delimiters``.

    Leading, trailing and repeated delimiters produce no empty tokens.
    """
    token: list[str] = []
    for char in text:
        if char in delimiters:
            if token:
                yield "".join(token)
                token = []
        else:
            token.append(char)
    if token:
        yield "".join(token)


def names_match(a: str, b: str) -> bool:
    """Compare names the way the kernel does.

    Only the first ``len(a)`` characters take part, so ``a`` matches any
    ``b`` that begins with it.
    """
    return b.startswith(a)