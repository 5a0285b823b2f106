"""Introductory demos: CPU, memory, persistence, concurrency and addresses."""

import inspect
import itertools
import os
import sys
import threading

from osdemos.timing import spin

DEFAULT_IO_PATH = "/tmp/file"
HEAP_BYTES = 100_000_000


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


def _steps(count):
    return itertools.count() if count is None else range(count)


def repeat_print(text, count=None, interval=1, out=None):
    """Print ``text`` then spin ``interval`` seconds, ``count`` times (forever if None)."""
    for _ in _steps(count):
        print(text, file=out)
        spin(interval)


def write_hello(path=DEFAULT_IO_PATH):
    """Write "hello world" to ``path``, force it to disk; return bytes written."""
    data = b"hello world\n"
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        written = os.write(fd, data)
        if written != len(data):
            raise OSError(f"short write: {written} of {len(data)} bytes")
        os.fsync(fd)
    finally:
        os.close(fd)
    return written


def count_up(value, steps=None, interval=1, out=None):
    """Increment a heap cell once per ``interval`` seconds; return the last value."""
    cell = [value]
    pid = os.getpid()
    print(f"({pid}) addr pointed to by p: {hex(id(cell))}", file=out)
    for _ in _steps(steps):
        spin(interval)
        cell[0] += 1
        print(f"({pid}) value of p: {cell[0]}", file=out)
    return cell[0]


class _Counter:
    def __init__(self):
        self.value = 0


def run_counter_threads(loops):
    """Let two threads bump a shared counter ``loops`` times each, unlocked."""
    counter = _Counter()

    def worker():
        for _ in range(loops):
            counter.value += 1

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return counter.value


def show_locations(out=None):
    """Print and return the addresses of code, a large heap block and a frame."""
    heap = bytearray(HEAP_BYTES)
    frame = inspect.currentframe()
    locations = {
        "code": id(show_locations.__code__),
        "heap": id(heap),
        "stack": id(frame),
    }
    del frame
    print(f"location of code : {hex(locations['code'])}", file=out)
    print(f"location of heap : {hex(locations['heap'])}", file=out)
    print(f"location of stack: {hex(locations['stack'])}", file=out)
    return locations


def _args(argv):
    return sys.argv[1:] if argv is None else list(argv)


def cpu_main(argv=None):
    args = _args(argv)
    if len(args) != 1:
        print("usage: cpu <string>", file=sys.stderr)
        return 1
    repeat_print(args[0])
    return 0


def io_main(argv=None):
    write_hello(DEFAULT_IO_PATH)
    return 0


def mem_main(argv=None):
    args = _args(argv)
    if len(args) != 1:
        print("usage: mem <value>", file=sys.stderr)
        return 1
    count_up(_atoi(args[0]))
    return 0


def threads_main(argv=None):
    args = _args(argv)
    if len(args) != 1:
        print("usage: threads <loops>", file=sys.stderr)
        return 1
    loops = _atoi(args[0])
    print("Initial value : 0")
    print(f"Final value   : {run_counter_threads(loops)}")
    return 0


def va_main(argv=None):
    show_locations()
    return 0