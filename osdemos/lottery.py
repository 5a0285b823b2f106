"""A lottery scheduler: jobs hold tickets and a random draw picks a winner."""

import random
import sys


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


class LotteryScheduler:
    """Jobs kept in most-recently-inserted-first order, each with tickets."""

    def __init__(self):
        self.jobs = []
        self.total_tickets = 0

    def insert(self, tickets):
        """Add a job holding ``tickets`` tickets at the front of the list."""
        self.jobs.insert(0, tickets)
        self.total_tickets += tickets

    def format_list(self):
        return "List: " + "".join(f"[{tickets}] " for tickets in self.jobs)

    def pick(self, winner):
        """Return the tickets of the job holding the winning ticket number."""
        counter = 0
        for tickets in self.jobs:
            counter += tickets
            if counter > winner:
                return tickets
        raise ValueError(f"winning ticket {winner} is out of range")

    def run(self, seed, loops):
        """Draw ``loops`` winners; yield (winning ticket, job tickets) pairs."""
        if self.total_tickets <= 0:
            raise ValueError("no tickets to draw from")
        rng = random.Random(seed)
        for _ in range(loops):
            winner = rng.randrange(self.total_tickets)
            yield winner, self.pick(winner)


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: lottery <seed> <loops>", file=sys.stderr)
        return 1
    seed = _atoi(args[0])
    loops = _atoi(args[1])

    scheduler = LotteryScheduler()
    for tickets in (50, 100, 25):
        scheduler.insert(tickets)

    print(scheduler.format_list())
    for winner, tickets in scheduler.run(seed, loops):
        print(scheduler.format_list())
        print(f"winner: {winner} {tickets}\n")
    return 0