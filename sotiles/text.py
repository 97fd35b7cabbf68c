"""Console messages and line-oriented reading helpers."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from itertools import takewhile
from typing import IO, Any

BUFFER_SIZE = 100
"""Number of characters requested from a stream per read."""

_NULL_TEXT = "(null)"


def _next_argument(values: Iterator[Any], spec: str) -> Any:
    try:
        return next(values)
    except StopIteration:
        raise TypeError(f"not enough arguments for '%{spec}'") from None


def format_message(template: str, *args: Any) -> str:
    """Expand ``%i``, ``%s`` and ``%c`` in ``template`` with ``args``.

    Any other character after ``%`` is dropped together with the ``%``.
    A ``None`` string argument is shown as ``(null)``.
    """
    parts: list[str] = []
    values = iter(args)
    chars = iter(template)
    for char in chars:
        if char != "%":
            parts.append(char)
            continue
        spec = next(chars, "")
        if spec == "i":
            parts.append(str(int(_next_argument(values, spec))))
        elif spec == "s":
            value = _next_argument(values, spec)
            parts.append(_NULL_TEXT if value is None else str(value))
        elif spec == "c":
            value = _next_argument(values, spec)
            parts.append(chr(value) if isinstance(value, int) else str(value)[:1])
    return "".join(parts)


def prt(template: str, *args: Any) -> None:
    """Write a formatted message to standard output."""
    sys.stdout.write(format_message(template, *args))
    sys.stdout.flush()


def strspn(text: str, accept: str) -> int:
    """Return the length of the leading part of ``text`` made only of ``accept``."""
    return sum(1 for _ in takewhile(lambda char: char in accept, text))


def line_length(line: str | None, include_newline: bool) -> int:
    """Length of ``line`` up to its first newline, optionally counting it."""
    if not line:
        return 0
    head, newline, _ = line.partition("\n")
    return len(head) + (1 if include_newline and newline else 0)


def read_lines(stream: IO[Any]) -> Iterator[Any]:
    """Yield the lines of ``stream``, each keeping its trailing newline.

    Works for text and binary streams; only ``\\n`` separates lines.
    """
    pending = None
    newline = None
    while True:
        chunk = stream.read(BUFFER_SIZE)
        if not chunk:
            break
        if newline is None:
            newline = "\n" if isinstance(chunk, str) else b"\n"
        pending = chunk if pending is None else pending + chunk
        while (index := pending.find(newline)) >= 0:
            yield pending[: index + 1]
            pending = pending[index + 1:]
    if pending:
        yield pending