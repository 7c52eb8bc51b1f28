"""Test type names for classes and annotations."""

import ctypes
import typing
from typing import Annotated, Any, Callable, Optional, TypeVar

import fmttest
import valuefmt


class A:
    pass


T = TypeVar("T")
UserId = typing.NewType("UserId", int)


@fmttest.params(
    "tp expected",
    int_=(int, "int"),
    class_=(A, "A"),
    any_=(Any, "Any"),
    missing=(valuefmt.MISSING, "Any"),
    none=(None, "None"),
    list_=(list[int], "list[int]"),
    bare_list=(typing.List, "list"),
    dict_=(dict[str, A], "dict[str, A]"),
    tuple_var=(tuple[int, ...], "tuple[int, ...]"),
    optional=(Optional[A], "A | None"),
    union=(int | str, "int | str"),
    callable_=(Callable[[str, int], bool], "func(str, int) bool"),
    callable_any=(Callable[..., Any], "func(...Any) Any"),
    callable_bare=(Callable, "func(...Any)"),
    callable_results=(Callable[[], tuple[int, str]], "func() (int, str)"),
    annotated=(Annotated[int, "meta"], "int"),
    typevar=(T, "T"),
    newtype=(UserId, "UserId"),
    forward=("Later", "Later"),
    int32=(ctypes.c_int32, "int32"),
    uint8=(ctypes.c_uint8, "uint8"),
    double=(ctypes.c_double, "float64"),
    char_p=(ctypes.c_char_p, "*char"),
    void_p=(ctypes.c_void_p, "*void"),
    pointer=(ctypes.POINTER(ctypes.c_int16), "*int16"),
    array=(ctypes.c_uint8 * 4, "[4]uint8"),
    cfunc=(ctypes.CFUNCTYPE(ctypes.c_int32, ctypes.c_double), "func(float64) int32"),
)
def test_type_name(key, tp, expected):
    assert valuefmt.type_name(tp) == expected


def test_qualified_class_name():
    assert valuefmt.type_name(A, qualify=True) == f"{__name__}.A"
    assert valuefmt.type_name(int, qualify=True) == "int"


@fmttest.params(
    "ret expected",
    none=(None, ""),
    missing=(valuefmt.MISSING, ""),
    single=(int, " int"),
    results=(tuple[int, str], " (int, str)"),
    one_tuple=(tuple[int], " tuple[int]"),
    empty_tuple=(tuple[()], ""),
    var_tuple=(tuple[int, ...], " tuple[int, ...]"),
)
def test_returns_text(key, ret, expected):
    assert valuefmt.returns_text(ret) == expected


def test_unwrap_optional():
    assert valuefmt.unwrap_optional(Optional[A]) is A
    assert valuefmt.unwrap_optional(A | None) is A
    assert valuefmt.unwrap_optional(int | str | None) is None
    assert valuefmt.unwrap_optional(A) is None


def test_is_variant_type():
    assert valuefmt.is_variant_type(Any)
    assert valuefmt.is_variant_type(object)
    assert valuefmt.is_variant_type(T)
    assert valuefmt.is_variant_type(int | str)
    assert not valuefmt.is_variant_type(int)
    assert not valuefmt.is_variant_type(list[Any])


def test_strip_annotation():
    assert valuefmt.strip_annotation(Annotated[UserId, "x"]) is int
