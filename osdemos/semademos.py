"""Semaphore demos: a binary semaphore, throttling and a reader-writer lock."""

import sys
import threading
import time

from osdemos.sync import RWLock

BINARY_LOOPS = 10_000_000


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


def _run_all(threads):
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def run_binary(loops=BINARY_LOOPS):
    """Two threads each add one to a counter ``loops`` times under a semaphore."""
    mutex = threading.Semaphore(1)
    counter = 0

    def child():
        nonlocal counter
        for _ in range(loops):
            with mutex:
                counter += 1

    _run_all([threading.Thread(target=child) for _ in range(2)])
    return counter


def run_throttle(num_threads, sem_value, delay=1, out=None):
    """Let at most ``sem_value`` of ``num_threads`` threads work at once.

    Returns the largest number seen working at the same time.
    """
    if num_threads > 0 and sem_value < 1:
        raise ValueError("the semaphore must admit at least one thread")
    sem = threading.Semaphore(max(sem_value, 0))
    guard = threading.Lock()
    active = 0
    peak = 0

    def child(index):
        nonlocal active, peak
        with sem:
            with guard:
                active += 1
                peak = max(peak, active)
                _say(out, f"child {index}")
            time.sleep(delay)
            with guard:
                active -= 1

    _say(out, "parent: begin")
    _run_all([threading.Thread(target=child, args=(i,)) for i in range(num_threads)])
    _say(out, "parent: end")
    return peak


def run_rwlock(read_loops, write_loops, out=None):
    """A reader and a writer share a counter under a reader-writer lock.

    Returns (values read, final counter).
    """
    lock = RWLock()
    counter = 0
    reads = []

    def reader():
        local = 0
        for _ in range(read_loops):
            lock.acquire_readlock()
            local = counter
            lock.release_readlock()
            reads.append(local)
            _say(out, f"read {local}")
        _say(out, f"read done: {local}")

    def writer():
        nonlocal counter
        for _ in range(write_loops):
            lock.acquire_writelock()
            counter += 1
            lock.release_writelock()
        _say(out, "write done")

    _run_all([threading.Thread(target=reader), threading.Thread(target=writer)])
    _say(out, "all done")
    return reads, counter


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "usage: semademos binary [loops] | throttle <num_threads> <sem_value> | rwlock <readloops> <writeloops>"
    command, rest = (args[0], args[1:]) if args else ("", [])
    if command == "binary" and len(rest) <= 1:
        loops = _atoi(rest[0]) if rest else BINARY_LOOPS
        result = run_binary(loops)
        print(f"result: {result} (should be {2 * loops})")
    elif command == "throttle" and len(rest) == 2:
        try:
            run_throttle(_atoi(rest[0]), _atoi(rest[1]))
        except ValueError as exc:
            print(exc, file=sys.stderr)
            return 1
    elif command == "rwlock" and len(rest) == 2:
        run_rwlock(_atoi(rest[0]), _atoi(rest[1]))
    else:
        print(usage, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())