import io

import pytest

from osdemos.bugs import (
    PR_STATE_INIT,
    PRThread,
    main,
    run_atomicity,
    run_deadlock,
    run_ordering,
)


def test_prthread_returns_result_and_starts_in_init_state():
    thread = PRThread(lambda: "result", 0)
    assert thread.state == PR_STATE_INIT
    assert thread.wait() == "result"


def test_prthread_wait_reraises():
    def boom():
        raise ValueError("bad")

    thread = PRThread(boom, 0)
    with pytest.raises(ValueError, match="bad"):
        thread.wait()


def test_ordering_fixed_reads_initial_state():
    out = io.StringIO()
    assert run_ordering(True, 0.05, out) == PR_STATE_INIT
    assert out.getvalue() == (
        "ordering: begin\nmMain: begin\nmMain: state is 0\nordering: end\n"
    )


def test_ordering_bug_reads_before_initialization():
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        run_ordering(False, 0.2, out)
    assert "ordering: end" not in out.getvalue()


def test_atomicity_fixed_uses_pid():
    out = io.StringIO()
    assert run_atomicity(True, 0.2, 0.05, out) == 100
    lines = out.getvalue().splitlines()
    assert "t1: use!" in lines
    assert "100" in lines
    assert lines[-1] == "main: end"


def test_atomicity_bug_when_cleared_during_use():
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        run_atomicity(False, 0.3, 0.05, out)


def test_atomicity_unfixed_works_when_clear_comes_late():
    out = io.StringIO()
    assert run_atomicity(False, 0.05, 0.3, out) == 100


def test_deadlock_with_timeout_reports_consistently():
    out = io.StringIO()
    completed = run_deadlock(timeout=0.2, out=out)
    text = out.getvalue()
    assert text.splitlines()[-1] == "main: end"
    assert completed == ("timed out" not in text)


def test_main_rejects_bad_usage():
    assert main([]) == 1
    assert main(["nothing"]) == 1
    assert main(["deadlock", "extra"]) == 1