import struct

import pytest

from osdemos.pstack import PersistentStack, apply_commands, main


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "ps.img"
    path.write_bytes(b"\0" * 4096)
    return path


def test_worked_example_persists_between_runs(image):
    with PersistentStack(image) as stack:
        assert apply_commands(stack, ["7", "13", "47", "pop"]) == [47]
    with PersistentStack(image) as stack:
        assert apply_commands(stack, ["pop", "pop", "99"]) == [13, 7]
    with PersistentStack(image) as stack:
        assert apply_commands(stack, ["pop"]) == [99]
        assert len(stack) == 0


def test_push_pop_round_trip(image):
    with PersistentStack(image) as stack:
        for value in (1, -5, 2**31 - 1):
            stack.push(value)
        assert len(stack) == 3
        assert [stack.pop(), stack.pop(), stack.pop()] == [2**31 - 1, -5, 1]


def test_file_layout(image):
    with PersistentStack(image) as stack:
        stack.push(7)
    data = image.read_bytes()
    count_size = struct.calcsize("N")
    assert struct.unpack_from("N", data, 0)[0] == 1
    assert struct.unpack_from("i", data, count_size)[0] == 7
    assert len(data) == 4096


def test_pop_empty_raises(image):
    with PersistentStack(image) as stack:
        with pytest.raises(IndexError):
            stack.pop()


def test_pop_empty_ignored_by_commands(image):
    with PersistentStack(image) as stack:
        assert apply_commands(stack, ["pop", "pop"]) == []


def test_full_stack(tmp_path):
    path = tmp_path / "small.img"
    path.write_bytes(b"\0" * (struct.calcsize("N") + 2 * struct.calcsize("i")))
    with PersistentStack(path) as stack:
        stack.push(1)
        stack.push(2)
        with pytest.raises(OverflowError):
            stack.push(3)
        assert apply_commands(stack, ["4", "pop", "pop", "pop"]) == [2, 1]


def test_non_numeric_push_is_zero(image):
    with PersistentStack(image) as stack:
        assert apply_commands(stack, ["abc", "pop"]) == [0]


def test_value_out_of_range(image):
    with PersistentStack(image) as stack:
        with pytest.raises(ValueError):
            stack.push(2**40)
        assert len(stack) == 0


@pytest.mark.parametrize("size", [2, 10])
def test_bad_file_size(tmp_path, size):
    path = tmp_path / "bad.img"
    path.write_bytes(b"\0" * size)
    with pytest.raises(ValueError):
        PersistentStack(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PersistentStack(tmp_path / "absent.img")


def test_main_uses_ps_img(image, monkeypatch, capsys):
    monkeypatch.chdir(image.parent)
    assert main(["5", "6", "pop"]) == 0
    assert main(["pop"]) == 0
    assert capsys.readouterr().out == "6\n5\n"