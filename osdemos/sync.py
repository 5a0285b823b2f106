"""Synchronisation primitives built from locks and condition variables."""

import threading


class Zemaphore:
    """A counting semaphore made from a mutex and a condition variable."""

    def __init__(self, value=0):
        self.value = value
        self._cond = threading.Condition(threading.Lock())

    def wait(self):
        """Block until the value is positive, then decrement it."""
        with self._cond:
            while self.value <= 0:
                self._cond.wait()
            self.value -= 1

    def post(self):
        """Increment the value and wake one waiter."""
        with self._cond:
            self.value += 1
            self._cond.notify()


class Synchronizer:
    """A one-shot signal that resets itself after each successful wait."""

    def __init__(self):
        self.done = False
        self._cond = threading.Condition(threading.Lock())

    def signal(self):
        """Mark the event as done and wake one waiter."""
        with self._cond:
            self.done = True
            self._cond.notify()

    def wait(self):
        """Block until signalled, then reset for the next use."""
        with self._cond:
            while not self.done:
                self._cond.wait()
            self.done = False


class RWLock:
    """A reader-writer lock: many readers or one writer at a time."""

    def __init__(self):
        self.readers = 0
        self._lock = threading.Semaphore(1)
        self._writelock = threading.Semaphore(1)

    def acquire_readlock(self):
        with self._lock:
            self.readers += 1
            if self.readers == 1:
                self._writelock.acquire()

    def release_readlock(self):
        with self._lock:
            self.readers -= 1
            if self.readers == 0:
                self._writelock.release()

    def acquire_writelock(self):
        self._writelock.acquire()

    def release_writelock(self):
        self._writelock.release()