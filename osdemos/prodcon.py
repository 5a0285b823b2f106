"""Producer/consumer over a bounded buffer, with condition variables or semaphores."""

import sys
import threading

END_OF_PRODUCTION = -1
CMAX = 10


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


class BoundedBuffer:
    """A fixed-size ring of slots; not synchronised on its own."""

    def __init__(self, size):
        if size < 1:
            raise ValueError(f"buffer size must be at least 1, not {size}")
        self._slots = [0] * size
        self._fill = 0
        self._use = 0
        self._count = 0

    @property
    def size(self):
        return len(self._slots)

    def is_full(self):
        return self._count == len(self._slots)

    def fill(self, value):
        """Store ``value`` in the next free slot; raise OverflowError when full."""
        if self.is_full():
            raise OverflowError("buffer is full")
        self._slots[self._fill] = value
        self._fill = (self._fill + 1) % len(self._slots)
        self._count += 1

    def get(self):
        """Take the oldest value; raise IndexError when empty."""
        if self._count == 0:
            raise IndexError("get from empty buffer")
        value = self._slots[self._use]
        self._use = (self._use + 1) % len(self._slots)
        self._count -= 1
        return value

    def __len__(self):
        return self._count


def _run(producer, consumer, consumers):
    threads = [threading.Thread(target=producer)]
    threads += [threading.Thread(target=consumer, args=(i,)) for i in range(consumers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def run_condition(buffer_size, loops, consumers=1, single_cv=False):
    """Produce 0..loops-1 for ``consumers`` consumers using condition variables.

    Each consumer stops at its end-of-production marker. Returns, per
    consumer, the values it took. With ``single_cv`` one condition variable
    serves both sides, which can hang when there are several consumers.
    """
    if consumers < 1:
        raise ValueError("at least one consumer is needed")
    buf = BoundedBuffer(buffer_size)
    mutex = threading.Lock()
    empty = threading.Condition(mutex)
    full = empty if single_cv else threading.Condition(mutex)
    received = [[] for _ in range(consumers)]

    def put(value):
        with empty:
            while buf.is_full():
                empty.wait()
            buf.fill(value)
            full.notify()

    def producer():
        for i in range(loops):
            put(i)
        for _ in range(consumers):
            put(END_OF_PRODUCTION)

    def consumer(index):
        while True:
            with full:
                while not buf:
                    full.wait()
                value = buf.get()
                empty.notify()
            if value == END_OF_PRODUCTION:
                return
            received[index].append(value)

    _run(producer, consumer, consumers)
    return received


def run_semaphore(buffer_size, loops, consumers=1, out=None):
    """Produce 0..loops-1 for ``consumers`` consumers using semaphores.

    Each consumer prints "<id> <value>" for every value it takes, the end
    marker included. Returns, per consumer, the values it took before the
    marker.
    """
    if consumers < 1:
        raise ValueError("at least one consumer is needed")
    if consumers > CMAX:
        raise ValueError(f"at most {CMAX} consumers are allowed")
    buf = BoundedBuffer(buffer_size)
    empty = threading.Semaphore(buffer_size)
    full = threading.Semaphore(0)
    mutex = threading.Semaphore(1)
    received = [[] for _ in range(consumers)]

    def put(value):
        empty.acquire()
        with mutex:
            buf.fill(value)
        full.release()

    def producer():
        for i in range(loops):
            put(i)
        for _ in range(consumers):
            put(END_OF_PRODUCTION)

    def consumer(index):
        value = 0
        while value != END_OF_PRODUCTION:
            full.acquire()
            with mutex:
                value = buf.get()
            empty.release()
            _say(out, f"{index} {value}")
            if value != END_OF_PRODUCTION:
                received[index].append(value)

    _run(producer, consumer, consumers)
    return received


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    modes = ("cv", "single-cv", "sema")
    if len(args) != 4 or args[0] not in modes:
        print(
            "usage: prodcon cv|single-cv|sema <buffersize> <loops> <consumers>",
            file=sys.stderr,
        )
        return 1
    mode = args[0]
    size, loops, consumers = (_atoi(arg) for arg in args[1:])
    try:
        if mode == "sema":
            run_semaphore(size, loops, consumers)
        else:
            run_condition(size, loops, consumers, single_cv=(mode == "single-cv"))
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())