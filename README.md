# osdemos

A collection of small, runnable programs that show the core ideas of
operating systems at work: creating processes, threads and their pitfalls,
locks, condition variables, semaphores, lottery scheduling, a persistent
stack kept in a file, and a tiny UDP client and server.

Each demonstration is a command you can run and watch, and the building
blocks behind them are importable from Python.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

Process demonstrations use `fork`, so a POSIX system is required for them.

## Commands

### Virtualisation and processes

| Command | What it shows |
| --- | --- |
| `osdemos-cpu <string>` | Prints the string once a second, forever, spinning the CPU in between. |
| `osdemos-mem <value>` | Stores a value, then increments and prints it once a second. |
| `osdemos-va` | Prints where code, heap and stack live in the address space. |
| `osdemos-io` | Writes `hello world` to a file and forces it to disk. |
| `osdemos-procs` | Forking a child, waiting for it, running another program in it, and redirecting its output. |
| `osdemos-lottery <seed> <loops>` | Lottery scheduling over three jobs holding 50, 100 and 25 tickets. |

For example:

```
osdemos-lottery 1 5
osdemos-cpu A
```

### Concurrency

| Command | What it shows |
| --- | --- |
| `osdemos-threads <loops>` | Two threads incrementing a shared counter without a lock. |
| `osdemos-threads-basic` | Creating threads, passing arguments and collecting results. |
| `osdemos-bugs` | Atomicity violations, ordering violations and deadlock, with their fixes. |
| `osdemos-joins` | Waiting for a child thread: with a condition variable, a semaphore, by spinning, and what goes wrong without a lock or a state variable. |
| `osdemos-prodcon` | Producers and consumers over a bounded buffer, with condition variables or semaphores. |
| `osdemos-dining` | The dining philosophers, with and without the fork-ordering fix. |
| `osdemos-sema` | A semaphore as a lock, throttling threads with a semaphore, and a reader-writer lock. |
| `osdemos-cas` | A successful and a failing compare-and-swap. |

### Persistence and distribution

`osdemos-pstack` keeps a stack of integers in the file `ps.img` in the
current directory. Each argument is either `pop`, which prints and removes
the top item, or a number to push. Items survive between runs:

```
truncate -s 4096 ps.img
osdemos-pstack 7 13 47 pop      # prints 47
osdemos-pstack pop pop 99       # prints 13, then 7
osdemos-pstack pop              # prints 99
```

`osdemos-udp-server` waits for datagrams and answers each one with
`goodbye world`; `osdemos-udp-client` sends `hello world` to it and prints
the reply. Start the server in one terminal and the client in another:

```
osdemos-udp-server
osdemos-udp-client
```

## Using the building blocks

The synchronisation primitives can be used directly:

```python
import threading
from osdemos.sync import Zemaphore, RWLock

done = Zemaphore(0)

def child():
    print("child")
    done.post()

threading.Thread(target=child).start()
done.wait()
print("parent: end")

lock = RWLock()
lock.acquire_readlock()
lock.release_readlock()
lock.acquire_writelock()
lock.release_writelock()
```

The persistent stack works as a context manager over an existing,
pre-sized backing file:

```python
from osdemos.pstack import PersistentStack

with PersistentStack("ps.img") as stack:
    stack.push(7)
    stack.push(13)
    print(len(stack))
    print(stack.pop())
```

Other pieces include `osdemos.lottery.LotteryScheduler`,
`osdemos.cas.AtomicInt`, `osdemos.prodcon.BoundedBuffer`,
`osdemos.dining.Table` and `osdemos.timing.spin`.