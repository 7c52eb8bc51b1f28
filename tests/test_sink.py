"""Test sink failures and the entry points."""

import io
from dataclasses import dataclass

import pytest

import fmttest
import valuefmt


@dataclass
class A:
    VInt: int


@dataclass
class Pair:
    left: A
    right: list[int]


def count_writes(value):
    sink = fmttest.RecordingSink()
    valuefmt.render(value, sink)
    return sink


def test_render_writes_pieces():
    sink = count_writes(A(1))
    assert sink.writes == ["A", "{\n", "    ", "VInt", ": ", "int{1}", ",\n", "}"]


def test_failure_stops_further_writes():
    sink = fmttest.FailingSink(fail_at=3)
    with pytest.raises(valuefmt.SinkError) as info:
        valuefmt.render(A(1), sink)
    assert info.value.__cause__ is sink.error
    assert sink.writes == ["A", "{\n"]
    assert sink.calls == 3


def test_failure_at_every_write():
    value = Pair(A(1), [2, 3])
    complete = count_writes(value).writes
    for fail_at in range(1, len(complete) + 1):
        sink = fmttest.FailingSink(fail_at=fail_at)
        with pytest.raises(valuefmt.SinkError):
            valuefmt.render(value, sink)
        assert sink.calls == fail_at
        assert sink.writes == complete[:fail_at - 1]


def test_sink_error_is_os_error():
    sink = fmttest.FailingSink(fail_at=1, error=OSError(28, "No space left on device"))
    with pytest.raises(OSError):
        valuefmt.render(1, sink)


def test_closed_sink():
    buf = io.StringIO()
    buf.close()
    with pytest.raises(valuefmt.SinkError) as info:
        valuefmt.render("x", buf)
    assert isinstance(info.value.__cause__, ValueError)


def test_other_errors_not_wrapped():
    class Broken:
        def write(self, text):
            raise KeyError(text)

    with pytest.raises(KeyError):
        valuefmt.render(1, Broken())


def test_format_value_returns_text():
    assert valuefmt.format_value(A(1)) == "A{\n    VInt: int{1},\n}"


def test_render_to_string_io():
    buf = io.StringIO()
    valuefmt.render([1], buf, declared=list[int])
    assert buf.getvalue() == "[\n    int{1},\n]"


def test_renderer_reusable_across_values():
    buf = io.StringIO()
    renderer = valuefmt.Renderer(buf)
    renderer.render(1)
    renderer.write(" ")
    renderer.render(True)
    assert buf.getvalue() == "int{1} bool{true}"
