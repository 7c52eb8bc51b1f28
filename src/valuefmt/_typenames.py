"""Readable names for classes and typing annotations."""

__all__ = [
    "type_name",
    "class_name",
    "func_type_name",
    "returns_text",
    "strip_annotation",
    "unwrap_optional",
    "is_variant_type",
]

import collections.abc
import inspect
import types
import typing

import valuefmt


_NoneType = type(None)
_UNIONS = (typing.Union, types.UnionType)


def class_name(cls, qualify=False):
    """Name of a class, with its module when qualify is set."""
    module = getattr(cls, "__module__", None)
    if qualify and module and module != "builtins":
        return f"{module}.{cls.__qualname__}"
    return cls.__name__


def type_name(tp, qualify=False):
    """Readable name for a class or typing annotation.

    Args:
        tp: Class, typing annotation, ctypes type or MISSING
        qualify: (bool) Prefix classes with their module

    Returns:
        (str) Name such as "int", "list[str]", "A | None" or "func(str) int"
    """
    if tp is valuefmt.MISSING or tp is typing.Any:
        return "Any"
    if tp is None or tp is _NoneType:
        return "None"
    if tp is Ellipsis:
        return "..."
    if isinstance(tp, str):
        return tp
    if isinstance(tp, typing.ForwardRef):
        return tp.__forward_arg__
    if isinstance(tp, (typing.TypeVar, typing.NewType)):
        return tp.__name__
    if tp is collections.abc.Callable:
        return func_type_name((), qualify)

    cname = valuefmt.ctype_name(tp)
    if cname is not None:
        return cname

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)
    if origin is typing.Annotated:
        return type_name(args[0], qualify)
    if origin in _UNIONS:
        return " | ".join(type_name(arg, qualify) for arg in args)
    if origin is collections.abc.Callable:
        return func_type_name(args, qualify)
    if origin is not None:
        base = type_name(origin, qualify)
        if not args:
            return base
        inner = ", ".join(type_name(arg, qualify) for arg in args)
        return f"{base}[{inner}]"
    if isinstance(tp, type):
        return class_name(tp, qualify)
    return repr(tp)


def func_type_name(args, qualify=False):
    """Function type text for the arguments of a Callable annotation.

    Args:
        args: Result of typing.get_args on a Callable, empty for bare Callable
        qualify: (bool) Prefix classes with their module

    Returns:
        (str) Text like "func(str, int) bool"
    """
    if not args:
        return "func(...Any)"
    params, ret = args
    if params is Ellipsis:
        plist = "...Any"
    else:
        plist = ", ".join(type_name(param, qualify) for param in params)
    return f"func({plist}){returns_text(ret, qualify)}"


def returns_text(ret, qualify=False):
    """Text following the parameter list of a function signature.

    Nothing is returned for a missing or None annotation. A fixed tuple of
    two or more types is a list of results and is parenthesized.

    Returns:
        (str) Empty, or the return types with a leading space
    """
    if ret is valuefmt.MISSING or ret is inspect.Signature.empty:
        return ""
    if ret is None or ret is _NoneType:
        return ""
    if typing.get_origin(ret) is tuple:
        args = typing.get_args(ret)
        if not args:
            return ""
        if len(args) > 1 and args[-1] is not Ellipsis:
            return f" ({', '.join(type_name(arg, qualify) for arg in args)})"
    return f" {type_name(ret, qualify)}"


def strip_annotation(tp):
    """Remove Annotated metadata and NewType wrappers from a declared type."""
    while True:
        if typing.get_origin(tp) is typing.Annotated:
            tp = typing.get_args(tp)[0]
        elif isinstance(tp, typing.NewType):
            tp = tp.__supertype__
        else:
            return tp


def unwrap_optional(tp):
    """The X of an Optional[X] declaration, or None for any other type."""
    if typing.get_origin(tp) not in _UNIONS:
        return None
    args = typing.get_args(tp)
    if _NoneType not in args:
        return None
    rest = [arg for arg in args if arg is not _NoneType]
    if len(rest) != 1:
        return None
    return rest[0]


def is_variant_type(tp):
    """True for declarations that hold a value of any concrete type.

    These are Any, object, type variables and unions of several types.
    """
    if tp is typing.Any or tp is object:
        return True
    if isinstance(tp, typing.TypeVar):
        return True
    return typing.get_origin(tp) in _UNIONS
