import io

import pytest

from osdemos.prodcon import (
    BoundedBuffer,
    main,
    run_condition,
    run_semaphore,
)


def test_buffer_is_fifo_and_wraps():
    buf = BoundedBuffer(2)
    buf.fill(1)
    buf.fill(2)
    assert buf.get() == 1
    buf.fill(3)
    assert len(buf) == 2
    assert [buf.get(), buf.get()] == [2, 3]
    assert len(buf) == 0


def test_buffer_full_raises():
    buf = BoundedBuffer(1)
    buf.fill(7)
    with pytest.raises(OverflowError):
        buf.fill(8)


def test_buffer_empty_raises():
    with pytest.raises(IndexError):
        BoundedBuffer(3).get()


def test_buffer_size_must_be_positive():
    with pytest.raises(ValueError):
        BoundedBuffer(0)


@pytest.mark.parametrize("size,loops,consumers", [(1, 20, 1), (3, 50, 3), (5, 10, 2)])
def test_condition_delivers_every_value_once(size, loops, consumers):
    received = run_condition(size, loops, consumers)
    assert len(received) == consumers
    assert sorted(v for part in received for v in part) == list(range(loops))


def test_condition_single_consumer_in_order():
    received = run_condition(2, 30, 1)
    assert received == [list(range(30))]


def test_single_cv_one_consumer():
    received = run_condition(1, 25, 1, single_cv=True)
    assert received == [list(range(25))]


def test_condition_needs_a_consumer():
    with pytest.raises(ValueError):
        run_condition(1, 5, 0)


def test_semaphore_delivers_and_prints():
    out = io.StringIO()
    received = run_semaphore(2, 40, 3, out)
    assert sorted(v for part in received for v in part) == list(range(40))
    lines = out.getvalue().splitlines()
    assert len(lines) == 40 + 3
    markers = [line for line in lines if line.split()[1] == "-1"]
    assert sorted(line.split()[0] for line in markers) == ["0", "1", "2"]


def test_semaphore_each_consumer_values_increase():
    received = run_semaphore(4, 60, 2, io.StringIO())
    for part in received:
        assert part == sorted(part)


def test_semaphore_consumer_limit():
    with pytest.raises(ValueError):
        run_semaphore(2, 5, 11, io.StringIO())


def test_main_usage_error(capsys):
    assert main(["cv", "1"]) == 1
    assert "usage" in capsys.readouterr().err


def test_main_sema_runs(capsys):
    assert main(["sema", "2", "3", "1"]) == 0
    assert capsys.readouterr().out.splitlines() == ["0 0", "0 1", "0 2", "0 -1"]