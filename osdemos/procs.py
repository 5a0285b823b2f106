"""Process creation demos: fork, wait, exec and output redirection."""

import os
import sys

DEFAULT_OUTPUT = "./p4.output"


def _stream(out):
    return sys.stdout if out is None else out


def _spawn(body, out):
    """Fork; run ``body`` in the child and exit with its status there.

    Returns the child's pid in the parent.
    """
    out.flush()
    if out is not sys.stdout:
        sys.stdout.flush()
    pid = os.fork()
    if pid == 0:
        status = 1
        try:
            status = body() or 0
        except BaseException:
            status = 1
        finally:
            try:
                out.flush()
            finally:
                os._exit(status)
    return pid


def _say_hello(out):
    print(f"hello world (pid:{os.getpid()})", file=out)


def _say_child(out):
    print(f"hello, I am child (pid:{os.getpid()})", file=out)


def fork_hello(out=None):
    """Fork a child and let both processes greet; return the child's pid.

    The parent does not wait for the child.
    """
    out = _stream(out)
    _say_hello(out)

    def child():
        _say_child(out)
        return 0

    rc = _spawn(child, out)
    print(f"hello, I am parent of {rc} (pid:{os.getpid()})", file=out)
    out.flush()
    return rc


def fork_wait(delay=5, out=None):
    """Fork a child that sleeps ``delay`` seconds; return (child pid, waited pid)."""
    out = _stream(out)
    _say_hello(out)

    def child():
        _say_child(out)
        out.flush()
        if delay:
            import time

            time.sleep(delay)
        return 0

    rc = _spawn(child, out)
    wc, _ = os.waitpid(rc, 0)
    print(f"hello, I am parent of {rc} (wc:{wc}) (pid:{os.getpid()})", file=out)
    out.flush()
    return rc, wc


def fork_exec(program, path, out=None):
    """Fork a child that replaces itself with ``program path``.

    The program's output goes to ``out``. Returns (child pid, waited pid).
    """
    out = _stream(out)
    _say_hello(out)

    def child():
        _say_child(out)
        out.flush()
        fd = out.fileno()
        if fd != 1:
            os.dup2(fd, 1)
        try:
            os.execvp(program, [program, path])
        except OSError:
            print("this shouldn't print out", file=out)
            return 1
        return 0

    rc = _spawn(child, out)
    wc, _ = os.waitpid(rc, 0)
    print(f"hello, I am parent of {rc} (wc:{wc}) (pid:{os.getpid()})", file=out)
    out.flush()
    return rc, wc


def fork_redirect(program, path, output=DEFAULT_OUTPUT):
    """Run ``program path`` in a child whose standard output is ``output``.

    Returns the child's exit code.
    """

    def child():
        fd = os.open(output, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o700)
        os.dup2(fd, 1)
        if fd != 1:
            os.close(fd)
        try:
            os.execvp(program, [program, path])
        except OSError:
            return 127
        return 0

    rc = _spawn(child, sys.stdout)
    wc, status = os.waitpid(rc, 0)
    if wc < 0:
        raise ChildProcessError(f"wait for child {rc} failed")
    return os.waitstatus_to_exitcode(status)


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    usage = "usage: procs hello | wait | exec <file> | redirect <file> [output]"
    if not args:
        print(usage, file=sys.stderr)
        return 1
    command, rest = args[0], args[1:]
    try:
        if command == "hello" and not rest:
            fork_hello()
        elif command == "wait" and not rest:
            fork_wait()
        elif command == "exec" and len(rest) == 1:
            fork_exec("wc", rest[0])
        elif command == "redirect" and len(rest) in (1, 2):
            fork_redirect("wc", *rest)
        else:
            print(usage, file=sys.stderr)
            return 1
    except OSError:
        print("fork failed", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())