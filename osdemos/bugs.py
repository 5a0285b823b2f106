"""Classic concurrency bugs: atomicity violation, deadlock, ordering violation."""

import contextlib
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

PR_STATE_INIT = 0
_T2 = " " * 27 + "t2"


def _say(out, text):
    stream = sys.stdout if out is None else out
    stream.write(f"{text}\n")


class PRThread:
    """A thread record whose creator pauses ``delay`` seconds after starting it."""

    def __init__(self, start, delay=1):
        self.state = PR_STATE_INIT
        self._result = None
        self._error = None
        self.tid = threading.Thread(target=self._run, args=(start,))
        self.tid.start()
        if delay:
            time.sleep(delay)

    def _run(self, start):
        try:
            self._result = start()
        except BaseException as exc:
            self._error = exc

    def wait(self):
        """Join the thread; return its result or raise what it raised."""
        self.tid.join()
        if self._error is not None:
            raise self._error
        return self._result


@dataclass
class _Proc:
    pid: int


@dataclass
class _ThreadInfo:
    proc_info: "_Proc | None"


def run_atomicity(fixed=False, use_delay=2, clear_delay=1, out=None):
    """One thread checks then uses shared state while another clears it.

    Returns the pid the first thread used, or None if it found the state
    already cleared. Without ``fixed`` the check and use are not atomic and
    RuntimeError is raised when the state vanishes between them.
    """
    info = _ThreadInfo(proc_info=_Proc(pid=100))
    guard = threading.Lock() if fixed else contextlib.nullcontext()

    def thread1():
        _say(out, "t1: before check")
        with guard:
            if info.proc_info is not None:
                _say(out, "t1: after check")
                time.sleep(use_delay)
                _say(out, "t1: use!")
                current = info.proc_info
                if current is None:
                    raise RuntimeError("t1: proc_info was cleared between check and use")
                _say(out, str(current.pid))
                return current.pid
        return None

    def thread2():
        _say(out, "                 t2: begin")
        time.sleep(clear_delay)
        with guard:
            _say(out, "                 t2: set to NULL")
            info.proc_info = None

    _say(out, "main: begin")
    with ThreadPoolExecutor(max_workers=2) as pool:
        first = pool.submit(thread1)
        second = pool.submit(thread2)
        pid = first.result()
        second.result()
    _say(out, "main: end")
    return pid


def run_deadlock(timeout=None, out=None):
    """Two threads take two locks in opposite orders and may deadlock.

    With ``timeout`` a thread that waits that long for a lock gives up and
    releases what it holds. Returns True if both threads got both locks.
    """
    l1 = threading.Lock()
    l2 = threading.Lock()
    limit = -1 if timeout is None else timeout

    def worker(tag, locks):
        _say(out, f"{tag}: begin")
        with contextlib.ExitStack() as held:
            for name, lock in locks:
                _say(out, f"{tag}: try to acquire {name}...")
                if not lock.acquire(timeout=limit):
                    _say(out, f"{tag}: timed out waiting for {name}")
                    return False
                held.callback(lock.release)
                _say(out, f"{tag}: {name} acquired")
        return True

    _say(out, "main: begin")
    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [
            pool.submit(worker, "t1", (("L1", l1), ("L2", l2))),
            pool.submit(worker, _T2, (("L2", l2), ("L1", l1))),
        ]
        results = [future.result() for future in futures]
    _say(out, "main: end")
    return all(results)


def run_ordering(fixed=False, delay=1, out=None):
    """A thread reads its own record, which may not be published yet.

    Returns the state the thread read. Without ``fixed`` the thread does not
    wait for the record and RuntimeError is raised if it is still missing.
    """
    m_thread = None
    initialized = False
    init_cond = threading.Condition(threading.Lock())

    def m_main():
        _say(out, "mMain: begin")
        if fixed:
            with init_cond:
                init_cond.wait_for(lambda: initialized)
        if m_thread is None:
            raise RuntimeError("mMain: thread state read before it was initialized")
        state = m_thread.state
        _say(out, f"mMain: state is {state}")
        return state

    _say(out, "ordering: begin")
    m_thread = PRThread(m_main, delay)
    if fixed:
        with init_cond:
            initialized = True
            init_cond.notify()
    state = m_thread.wait()
    _say(out, "ordering: end")
    return state


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    commands = {
        "atomicity": lambda: run_atomicity(False),
        "atomicity-fixed": lambda: run_atomicity(True),
        "deadlock": lambda: run_deadlock(),
        "ordering": lambda: run_ordering(False),
        "ordering-fixed": lambda: run_ordering(True),
    }
    if len(args) != 1 or args[0] not in commands:
        print("usage: bugs " + " | ".join(commands), file=sys.stderr)
        return 1
    try:
        commands[args[0]]()
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())