"""Thread creation demos: passing arguments, returning values, sharing state."""

import inspect
import sys
import threading
from concurrent.futures import ThreadPoolExecutor


def _say(out, text):
    stream = sys.stdout if out is None else out
    stream.write(f"{text}\n")


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


def _run_in_thread(fn, *args):
    """Run ``fn(*args)`` on a new thread, wait for it and return its result."""
    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(fn, *args).result()


def run_thread_with_args(a=10, b=20, out=None):
    """Hand a pair of values to a thread that prints them; return what it saw."""

    def worker(first, second):
        _say(out, f"{first} {second}")
        return first, second

    seen = _run_in_thread(worker, a, b)
    _say(out, "done")
    return seen


def run_thread_simple(value=100, out=None):
    """Hand a single value to a thread, which prints it and returns it plus one."""

    def worker(arg):
        _say(out, str(arg))
        return arg + 1

    rvalue = _run_in_thread(worker, value)
    _say(out, f"returned {rvalue}")
    return rvalue


def run_thread_with_return(a=10, b=20, out=None):
    """Hand arguments to a thread that returns a fresh (1, 2) pair."""

    def worker(first, second):
        _say(out, f"args {first} {second}")
        return 1, 2

    x, y = _run_in_thread(worker, a, b)
    _say(out, f"returned {x} {y}")
    return x, y


def run_letters(letters=("A", "B"), out=None):
    """Start one thread per letter, each printing its letter.

    Returns the letters in the order the threads printed them.
    """
    printed = []
    guard = threading.Lock()

    def worker(letter):
        with guard:
            _say(out, letter)
            printed.append(letter)

    _say(out, "main: begin")
    threads = [threading.Thread(target=worker, args=(letter,)) for letter in letters]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    _say(out, "main: end")
    return printed


class _Counter:
    def __init__(self):
        self.value = 0


def run_shared_counter(loops, out=None):
    """Two threads each add one to a shared, unlocked counter ``loops`` times.

    Returns the final counter, which may fall short of twice ``loops``.
    """
    counter = _Counter()

    def worker(letter):
        frame = inspect.currentframe()
        _say(out, f"{letter}: begin [addr of i: {hex(id(frame))}]")
        del frame
        for _ in range(loops):
            counter.value = counter.value + 1
        _say(out, f"{letter}: done")

    _say(out, f"main: begin [counter = {counter.value}] [{id(counter):x}]")
    threads = [threading.Thread(target=worker, args=(letter,)) for letter in "AB"]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    _say(out, f"main: done\n [counter: {counter.value}]\n [should: {loops * 2}]")
    return counter.value


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "usage: threads_basic args | simple | return | letters | counter <loopcount>"
    if not args:
        print(usage, file=sys.stderr)
        return 1
    command, rest = args[0], args[1:]
    if command == "counter":
        if len(rest) != 1:
            print("usage: main-first <loopcount>", file=sys.stderr)
            return 1
        run_shared_counter(_atoi(rest[0]))
        return 0
    handlers = {
        "args": run_thread_with_args,
        "simple": run_thread_simple,
        "return": run_thread_with_return,
        "letters": run_letters,
    }
    if command not in handlers or rest:
        print(usage, file=sys.stderr)
        return 1
    handlers[command]()
    return 0


if __name__ == "__main__":
    sys.exit(main())