import os

import pytest

from osdemos import procs


def _pipe():
    r, w = os.pipe()
    return os.fdopen(r), os.fdopen(w, "w")


def test_fork_hello_greets_from_both_processes():
    src, out = _pipe()
    with out:
        pid = procs.fork_hello(out=out)
    with src:
        text = src.read()
    os.waitpid(pid, 0)
    lines = text.splitlines()
    me = os.getpid()
    assert lines[0] == f"hello world (pid:{me})"
    assert f"hello, I am child (pid:{pid})" in lines
    assert f"hello, I am parent of {pid} (pid:{me})" in lines
    assert len(lines) == 3


def test_fork_wait_parent_reports_last():
    src, out = _pipe()
    with out:
        rc, wc = procs.fork_wait(0, out=out)
    with src:
        text = src.read()
    assert wc == rc
    lines = text.splitlines()
    assert lines[1] == f"hello, I am child (pid:{rc})"
    assert lines[-1] == f"hello, I am parent of {rc} (wc:{wc}) (pid:{os.getpid()})"


def test_fork_exec_runs_program(tmp_path):
    source = tmp_path / "data.txt"
    source.write_text("alpha\nbeta\n")
    src, out = _pipe()
    with out:
        rc, wc = procs.fork_exec("cat", str(source), out=out)
    with src:
        text = src.read()
    assert wc == rc
    lines = text.splitlines()
    assert lines[1] == f"hello, I am child (pid:{rc})"
    assert lines[2:4] == ["alpha", "beta"]
    assert lines[-1].startswith(f"hello, I am parent of {rc} ")
    assert "this shouldn't print out" not in text


def test_fork_exec_missing_program_falls_through(tmp_path):
    src, out = _pipe()
    with out:
        rc, wc = procs.fork_exec("no-such-program-here", str(tmp_path / "x"), out=out)
    with src:
        text = src.read()
    assert wc == rc
    assert "this shouldn't print out" in text.splitlines()


def test_fork_redirect_writes_output_file(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("one two three\n")
    output = tmp_path / "out.txt"
    output.write_text("stale content that must be truncated away\n")
    code = procs.fork_redirect("cat", str(source), str(output))
    assert code == 0
    assert output.read_text() == source.read_text()


def test_fork_redirect_missing_program_fails(tmp_path):
    output = tmp_path / "out.txt"
    code = procs.fork_redirect("no-such-program-here", "x", str(output))
    assert code == 127
    assert output.read_text() == ""


@pytest.mark.parametrize("argv", [[], ["bogus"], ["exec"], ["hello", "extra"]])
def test_main_rejects_bad_usage(argv, capsys):
    assert procs.main(argv) == 1
    assert "usage: procs" in capsys.readouterr().err