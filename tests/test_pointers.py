"""Test pointers, nil values and raw addresses."""

import ctypes
import gc
import weakref
from dataclasses import dataclass
from typing import Optional

import fmttest
from fmttest import text


@dataclass
class A:
    VInt: int


@dataclass
class Node:
    value: int
    next: Optional["Node"] = None


class CNode(ctypes.Structure):
    pass


CNode._fields_ = [("value", ctypes.c_int32), ("next", ctypes.POINTER(CNode))]


class CName(ctypes.Structure):
    _fields_ = [("name", ctypes.c_char_p), ("data", ctypes.c_void_p)]


def test_nil_optional():
    assert fmttest.fmt(None, declared=Optional[A]) == "(*A)(<nil>)"
    assert fmttest.fmt(None, declared=A | None) == "(*A)(<nil>)"


def test_nil_under_plain_declaration():
    assert fmttest.fmt(None, declared=A) == "(*A)(<nil>)"
    assert fmttest.fmt(None, declared=int) == "(*int)(<nil>)"


def test_optional_value_dereferences():
    assert fmttest.fmt(A(2), declared=Optional[A]) == text("""
        &A{
            VInt: int{2},
        }
    """)


def test_string_annotations_resolve_one_at_a_time():
    @dataclass
    class Leaf:
        VInt: int

    @dataclass
    class Holder:
        ref: "Optional[Leaf]"
        count: "int"

    assert fmttest.fmt(Holder(None, 3)) == text("""
        Holder{
            ref: (*Leaf)(<nil>),
            count: int{3},
        }
    """)
    assert fmttest.fmt(Holder(Leaf(5), 3)) == text("""
        Holder{
            ref: &Leaf{
                VInt: int{5},
            },
            count: int{3},
        }
    """)


def test_pointer_keeps_depth():
    assert fmttest.fmt(Node(1, Node(2))) == text("""
        Node{
            value: int{1},
            next: &Node{
                value: int{2},
                next: (*Node)(<nil>),
            },
        }
    """)


def test_weakref_pointer():
    target = A(3)
    ref = weakref.ref(target)
    assert fmttest.fmt(ref) == text("""
        &A{
            VInt: int{3},
        }
    """)


def test_dead_weakref_is_nil():
    target = A(3)
    ref = weakref.ref(target)
    del target
    gc.collect()
    assert fmttest.fmt(ref) == "(*object)(<nil>)"


def test_ctypes_pointer():
    node = CNode(5)
    assert fmttest.fmt(ctypes.pointer(node)) == text("""
        &CNode{
            value: int32{5},
            next: (*CNode)(<nil>),
        }
    """)


def test_ctypes_null_pointer():
    assert fmttest.fmt(ctypes.POINTER(CNode)()) == "(*CNode)(<nil>)"


def test_ctypes_pointer_to_scalar():
    number = ctypes.c_int16(9)
    assert fmttest.fmt(ctypes.pointer(number)) == "&int16{9}"


def test_ctypes_self_reference_cycle():
    node = CNode(1)
    node.next = ctypes.pointer(node)
    assert fmttest.fmt(node) == text("""
        CNode{
            value: int32{1},
            next: &<cycle>,
        }
    """)


def test_raw_pointer():
    assert fmttest.fmt(ctypes.c_void_p(0xDEADBEEF)) == "Pointer(deadbeef)"
    assert fmttest.fmt(ctypes.c_void_p()) == "Pointer(0)"


def test_null_char_pointer_field():
    assert fmttest.fmt(CName()) == text("""
        CName{
            name: (*char)(<nil>),
            data: Pointer(0),
        }
    """)


def test_char_pointer_field():
    value = CName(b"hi", 16)
    assert fmttest.fmt(value) == text("""
        CName{
            name: string{"hi"},
            data: Pointer(10),
        }
    """)


def test_nil_leaves_terminate():
    # Every recursion point holds a nil, nothing below them is visited
    assert fmttest.fmt(Node(1)) == text("""
        Node{
            value: int{1},
            next: (*Node)(<nil>),
        }
    """)
