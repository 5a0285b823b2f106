"""A persistent stack of integers kept in a memory-mapped file.

The file begins with a native ``size_t`` item count followed by the
native ``int`` items. Values pushed in one run survive to the next.
"""

import mmap
import struct
import sys

_COUNT = struct.Struct("N")
_ITEM = struct.Struct("i")
DEFAULT_PATH = "ps.img"


def _atoi(text):
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if not ch.isdigit():
            break
        digits += ch
    return sign * int(digits) if digits else 0


class PersistentStack:
    """A stack of ints stored in, and mapped from, a file of fixed size."""

    def __init__(self, path):
        self._file = open(path, "r+b")
        try:
            self.size = self._file.seek(0, 2)
            if self.size < _COUNT.size or self.size % _ITEM.size != 0:
                raise ValueError(
                    f"backing file size {self.size} must be at least "
                    f"{_COUNT.size} and a multiple of {_ITEM.size}"
                )
            self._map = mmap.mmap(self._file.fileno(), self.size)
        except BaseException:
            self._file.close()
            raise

    def _count(self):
        return _COUNT.unpack_from(self._map, 0)[0]

    def _set_count(self, n):
        _COUNT.pack_into(self._map, 0, n)

    def __len__(self):
        return self._count()

    def push(self, value):
        """Push ``value``; raise OverflowError when the file is full."""
        n = self._count()
        if _COUNT.size + (n + 1) * _ITEM.size > self.size:
            raise OverflowError("stack is full")
        try:
            _ITEM.pack_into(self._map, _COUNT.size + n * _ITEM.size, value)
        except struct.error as exc:
            raise ValueError(f"value {value} does not fit in an int") from exc
        self._set_count(n + 1)

    def pop(self):
        """Remove and return the top value; raise IndexError when empty."""
        n = self._count()
        if n == 0:
            raise IndexError("pop from empty stack")
        n -= 1
        self._set_count(n)
        return _ITEM.unpack_from(self._map, _COUNT.size + n * _ITEM.size)[0]

    def close(self):
        if not self._map.closed:
            self._map.flush()
            self._map.close()
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def apply_commands(stack, commands):
    """Run "pop" or push commands in order; return the values popped.

    Pops on an empty stack and pushes on a full one are ignored.
    """
    popped = []
    for command in commands:
        if command == "pop":
            try:
                popped.append(stack.pop())
            except IndexError:
                pass
        else:
            try:
                stack.push(_atoi(command))
            except OverflowError:
                pass
    return popped


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    with PersistentStack(DEFAULT_PATH) as stack:
        for value in apply_commands(stack, args):
            print(value)
    return 0