"""Dining philosophers on five fork semaphores, with and without deadlock."""

import sys
import threading

PHILOSOPHERS = 5


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


def left(p):
    """The fork on philosopher ``p``'s left."""
    return p


def right(p):
    """The fork on philosopher ``p``'s right."""
    return (p + 1) % PHILOSOPHERS


class Table:
    """Five forks shared by five philosophers.

    With ``ordered`` the last philosopher picks up the right fork first,
    which breaks the cycle that can deadlock. With ``out`` each step is
    traced, indented by the philosopher's number; with None nothing is.
    """

    def __init__(self, ordered=True, out=None):
        self.ordered = ordered
        self.out = out
        self.forks = [threading.Semaphore(1) for _ in range(PHILOSOPHERS)]
        self.meals = [0] * PHILOSOPHERS
        self._print_lock = threading.Semaphore(1)

    def _trace(self, p, text):
        if self.out is None:
            return
        with self._print_lock:
            self.out.write(" " * (p * 10) + text + "\n")

    def _take(self, p, fork, label):
        self._trace(p, f"{label}try {fork}")
        self.forks[fork].acquire()

    def get_forks(self, p):
        if self.ordered:
            if p == PHILOSOPHERS - 1:
                self._take(p, right(p), f"{p} ")
                self._take(p, left(p), f"{p} ")
            else:
                self._take(p, left(p), "")
                self._take(p, right(p), "")
        else:
            self._take(p, left(p), f"{p}: ")
            self._take(p, right(p), f"{p}: ")

    def put_forks(self, p):
        self.forks[left(p)].release()
        self.forks[right(p)].release()

    def philosopher(self, p, num_loops):
        """Think, take forks, eat and put them back ``num_loops`` times."""
        self._trace(p, f"{p}: start")
        for _ in range(num_loops):
            self._trace(p, f"{p}: think")
            self.get_forks(p)
            self._trace(p, f"{p}: eat")
            self.meals[p] += 1
            self.put_forks(p)
            self._trace(p, f"{p}: done")


def dine(num_loops, ordered=True, out=None):
    """Run five philosophers concurrently; return the meals each ate.

    Without ``ordered`` the run may deadlock and never return.
    """
    table = Table(ordered, out)
    threads = [
        threading.Thread(target=table.philosopher, args=(p, num_loops))
        for p in range(PHILOSOPHERS)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return list(table.meals)


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    flags = {arg for arg in args if arg.startswith("--")}
    positional = [arg for arg in args if not arg.startswith("--")]
    if len(positional) != 1 or not flags <= {"--print", "--deadlock"}:
        print(
            "usage: dining_philosophers [--print] [--deadlock] <num_loops>",
            file=sys.stderr,
        )
        return 1
    print("dining: started")
    sys.stdout.flush()
    dine(
        _atoi(positional[0]),
        ordered="--deadlock" not in flags,
        out=sys.stdout if "--print" in flags else None,
    )
    print("dining: finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())