import io
from collections import Counter

from osdemos.dining import PHILOSOPHERS, Table, dine, left, main, right


def test_left_and_right():
    assert [left(p) for p in range(5)] == [0, 1, 2, 3, 4]
    assert [right(p) for p in range(5)] == [1, 2, 3, 4, 0]


def test_every_fork_shared_by_two_philosophers():
    users = Counter(left(p) for p in range(PHILOSOPHERS))
    users.update(right(p) for p in range(PHILOSOPHERS))
    assert users == Counter({fork: 2 for fork in range(PHILOSOPHERS)})


def test_get_forks_holds_both():
    table = Table(ordered=True)
    table.get_forks(0)
    assert table.forks[0].acquire(blocking=False) is False
    assert table.forks[1].acquire(blocking=False) is False
    table.put_forks(0)
    assert table.forks[0].acquire(blocking=False) is True
    assert table.forks[1].acquire(blocking=False) is True


def test_ordered_last_philosopher_trace():
    out = io.StringIO()
    table = Table(ordered=True, out=out)
    table.get_forks(4)
    table.put_forks(4)
    assert out.getvalue().splitlines() == [" " * 40 + "4 try 0", " " * 40 + "4 try 4"]


def test_ordered_other_philosopher_trace():
    out = io.StringIO()
    table = Table(ordered=True, out=out)
    table.get_forks(1)
    assert out.getvalue().splitlines() == [" " * 10 + "try 1", " " * 10 + "try 2"]


def test_unordered_trace():
    out = io.StringIO()
    table = Table(ordered=False, out=out)
    table.get_forks(2)
    assert out.getvalue().splitlines() == [" " * 20 + "2: try 2", " " * 20 + "2: try 3"]


def test_philosopher_alone_eats_every_loop():
    out = io.StringIO()
    table = Table(ordered=False, out=out)
    table.philosopher(3, 4)
    lines = [line.strip() for line in out.getvalue().splitlines()]
    assert lines[0] == "3: start"
    assert lines.count("3: eat") == 4
    assert lines.count("3: done") == 4
    assert table.meals[3] == 4


def test_dine_ordered_finishes():
    assert dine(50, ordered=True) == [50] * PHILOSOPHERS


def test_dine_traced():
    out = io.StringIO()
    meals = dine(3, ordered=True, out=out)
    assert meals == [3] * PHILOSOPHERS
    lines = [line.strip() for line in out.getvalue().splitlines()]
    for p in range(PHILOSOPHERS):
        assert lines.count(f"{p}: done") == 3


def test_main_usage(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().err


def test_main_runs(capsys):
    assert main(["2"]) == 0
    assert capsys.readouterr().out.splitlines() == ["dining: started", "dining: finished"]