"""Ways for a parent thread to wait for a child, correct and broken."""

import sys
import threading
import time

from osdemos.sync import Synchronizer, Zemaphore


def _say(out, text):
    stream = sys.stdout if out is None else out
    stream.write(f"{text}\n")


class _CondVar:
    """A condition variable that may be signalled without holding the mutex.

    A signal sent while nobody waits is lost.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._waiters = []

    def wait(self, mutex, timeout=None):
        """Release ``mutex``, wait for a signal, reacquire; False on timeout."""
        waiter = threading.Lock()
        waiter.acquire()
        with self._guard:
            self._waiters.append(waiter)
        mutex.release()
        try:
            woken = waiter.acquire(timeout=-1 if timeout is None else timeout)
            if not woken:
                with self._guard:
                    if waiter in self._waiters:
                        self._waiters.remove(waiter)
                    else:
                        woken = True
        finally:
            mutex.acquire()
        return woken

    def signal(self):
        with self._guard:
            if self._waiters:
                self._waiters.pop(0).release()


def _start(target):
    thread = threading.Thread(target=target)
    thread.start()
    return thread


def join_with_condition(delay=1, out=None):
    """Wait for the child using a lock, a condition variable and a flag."""
    done = False
    cond = threading.Condition(threading.Lock())

    def child():
        nonlocal done
        _say(out, "child")
        time.sleep(delay)
        with cond:
            done = True
            cond.notify()

    _say(out, "parent: begin")
    thread = _start(child)
    with cond:
        while not done:
            cond.wait()
    _say(out, "parent: end")
    thread.join()


def join_with_synchronizer(delay=1, out=None):
    """Wait for the child through a reusable Synchronizer."""
    sync = Synchronizer()

    def child():
        _say(out, "child")
        time.sleep(delay)
        sync.signal()

    _say(out, "parent: begin")
    thread = _start(child)
    sync.wait()
    _say(out, "parent: end")
    thread.join()


def join_without_lock(delay=1, wait_delay=2, timeout=None, out=None):
    """The child sets the flag and signals without the lock.

    If the signal arrives before the parent waits it is lost; without a
    ``timeout`` the parent then waits forever. Returns True if every wait
    ended with a signal, False if one timed out.
    """
    done = False
    mutex = threading.Lock()
    cv = _CondVar()

    def child():
        nonlocal done
        _say(out, "child: begin")
        time.sleep(delay)
        done = True
        _say(out, "child: signal")
        cv.signal()

    _say(out, "parent: begin")
    thread = _start(child)
    woken = True
    with mutex:
        _say(out, "parent: check condition")
        while not done:
            time.sleep(wait_delay)
            _say(out, "parent: wait to be signalled...")
            if not cv.wait(mutex, timeout):
                woken = False
                _say(out, "parent: no signal arrived")
    _say(out, "parent: end")
    thread.join()
    return woken


def join_without_state(wait_delay=2, timeout=None, out=None):
    """Wait on a condition variable with no flag to record the child's signal.

    Returns True if the parent was woken, False if its wait timed out.
    """
    cond = threading.Condition(threading.Lock())

    def child():
        _say(out, "child: begin")
        with cond:
            _say(out, "child: signal")
            cond.notify()

    _say(out, "parent: begin")
    thread = _start(child)
    time.sleep(wait_delay)
    _say(out, "parent: wait to be signalled...")
    with cond:
        woken = cond.wait(timeout)
    if not woken:
        _say(out, "parent: no signal arrived")
    _say(out, "parent: end")
    thread.join()
    return woken


def join_spinning(delay=5, out=None):
    """Busy-wait on a flag until the child sets it."""
    done = False

    def child():
        nonlocal done
        _say(out, "child")
        time.sleep(delay)
        done = True

    _say(out, "parent: begin")
    thread = _start(child)
    while not done:
        pass
    _say(out, "parent: end")
    thread.join()


def join_with_semaphore(delay=2, out=None):
    """Wait for the child on a semaphore that starts at zero."""
    sem = threading.Semaphore(0)

    def child():
        time.sleep(delay)
        _say(out, "child")
        sem.release()

    _say(out, "parent: begin")
    thread = _start(child)
    sem.acquire()
    _say(out, "parent: end")
    thread.join()


def join_with_zemaphore(delay=4, out=None):
    """Wait for the child on a Zemaphore that starts at zero."""
    sem = Zemaphore(0)

    def child():
        time.sleep(delay)
        _say(out, "child")
        sem.post()

    _say(out, "parent: begin")
    thread = _start(child)
    sem.wait()
    _say(out, "parent: end")
    thread.join()


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    commands = {
        "cv": join_with_condition,
        "modular": join_with_synchronizer,
        "no-lock": join_without_lock,
        "no-state": join_without_state,
        "spin": join_spinning,
        "sema": join_with_semaphore,
        "zemaphore": join_with_zemaphore,
    }
    if len(args) != 1 or args[0] not in commands:
        print("usage: joins " + " | ".join(commands), file=sys.stderr)
        return 1
    commands[args[0]]()
    return 0


if __name__ == "__main__":
    sys.exit(main())