"""Classify Python values into render kinds.

The declared type a value was found under decides how it is rendered when
the declaration says more than the value does: ``Any`` makes a variant,
``Optional[X]`` a pointer, and a None under a container declaration renders
that container's nil form. Without a declaration the runtime type decides.
"""

__all__ = ["describe"]

import asyncio
import builtins
import collections
import collections.abc
import ctypes
import dataclasses
import decimal
import enum
import fractions
import functools
import inspect
import queue
import sys
import types
import typing
import weakref

import valuefmt


_REALS = (float, decimal.Decimal, fractions.Fraction)
_QUEUES = (queue.Queue, queue.SimpleQueue, asyncio.Queue)
_COLLECTIONS = (collections.abc.Sequence, collections.abc.Set)


def describe(value, declared=valuefmt.MISSING, options=None):
    """Build the type descriptor for a value.

    Args:
        value: Any Python value, MISSING for an unset attribute
        declared: Type the value was declared as, MISSING when unknown
        options: (RenderOptions | None) Options of the current render

    Returns:
        (TypeInfo) Descriptor for the value
    """
    if options is None:
        options = valuefmt.DEFAULT_OPTIONS
    Kind = valuefmt.Kind
    TypeInfo = valuefmt.TypeInfo

    if value is valuefmt.MISSING:
        return TypeInfo(Kind.INVALID)
    if declared is valuefmt.MISSING:
        if value is None:
            return TypeInfo(Kind.INVALID)
        return _describe_value(value, declared, options)

    declared = valuefmt.strip_annotation(declared)
    if valuefmt.is_simple_ctype(declared) and not valuefmt.is_cdata(value):
        return valuefmt.describe_scalar(declared, value)

    pointee = valuefmt.unwrap_optional(declared)
    if pointee is not None:
        name = valuefmt.type_name(pointee, options.qualify_names)
        if value is None:
            return TypeInfo(Kind.POINTER, name=name, nil=True)
        return TypeInfo(Kind.POINTER, name=name, value=value,
                        target=value, target_type=pointee)

    if valuefmt.is_variant_type(declared):
        return TypeInfo(Kind.VARIANT,
                        name=valuefmt.type_name(declared, options.qualify_names),
                        value=value, nil=value is None, target=value)

    if value is None:
        return _describe_nil(declared, options)
    return _describe_value(value, declared, options)


def _describe_nil(declared, options):
    """None found where a declaration expects a value."""
    Kind = valuefmt.Kind
    TypeInfo = valuefmt.TypeInfo
    name = valuefmt.type_name(declared, options.qualify_names)
    origin = typing.get_origin(declared) or declared

    if origin is collections.abc.Callable:
        return TypeInfo(Kind.FUNCTION, name=name, nil=True)
    if isinstance(origin, type) and not issubclass(origin, str):
        if issubclass(origin, collections.abc.Mapping):
            return TypeInfo(Kind.MAP, name=name, nil=True)
        if issubclass(origin, _COLLECTIONS) and not hasattr(origin, "_fields"):
            kind = Kind.ARRAY if issubclass(origin, tuple) else Kind.SLICE
            return TypeInfo(kind, name=name, nil=True)
    return TypeInfo(Kind.POINTER, name=name, nil=True)


def _declared_args(value, declared):
    """Type arguments of a generic declaration the value is an instance of."""
    origin = typing.get_origin(declared)
    if isinstance(origin, type) and isinstance(value, origin):
        return typing.get_args(declared)
    return ()


def _type_hints(obj):
    """Resolved annotations.

    When the annotations can't all be evaluated together, each one is
    evaluated on its own against the defining module, with names that
    still can't be found left as forward references.
    """
    try:
        return typing.get_type_hints(obj)
    except (NameError, TypeError, AttributeError):
        return _partial_hints(obj)


class _Namespace(dict):
    """Lookup that turns unknown names into forward references."""

    def __missing__(self, name):
        return typing.ForwardRef(name)


def _partial_hints(obj):
    owners = reversed(obj.__mro__) if isinstance(obj, type) else (obj,)
    hints = {}
    for owner in owners:
        try:
            annotations = inspect.get_annotations(owner)
        except (NameError, TypeError, AttributeError):
            continue
        module = sys.modules.get(getattr(owner, "__module__", None) or "")
        namespace = _Namespace(vars(builtins))
        namespace.update(vars(module) if module else {})
        if isinstance(owner, type):
            namespace[owner.__name__] = owner
        for name, annotation in annotations.items():
            if isinstance(annotation, str):
                try:
                    annotation = eval(annotation, {}, namespace)
                except (SyntaxError, TypeError, AttributeError):
                    continue
            hints[name] = annotation
    return hints


def _describe_value(value, declared, options):
    """Classify a value by its runtime type."""
    Kind = valuefmt.Kind
    TypeInfo = valuefmt.TypeInfo
    qualify = options.qualify_names
    cls = type(value)

    if valuefmt.is_cdata(value):
        return valuefmt.describe_cdata(value, options)
    if isinstance(value, (type, types.ModuleType)):
        return TypeInfo(Kind.UNKNOWN, name=cls.__name__, value=value)
    if isinstance(value, enum.Enum) and not isinstance(value, (int, str)):
        return TypeInfo(Kind.UNKNOWN, name=cls.__name__, value=value)

    if isinstance(value, bool):
        return TypeInfo(Kind.BOOL, name="bool", value=value)
    if isinstance(value, int):
        return TypeInfo(Kind.INT, name=valuefmt.class_name(cls, qualify),
                        value=value)
    if isinstance(value, _REALS):
        bits = 64 if isinstance(value, float) else 0
        return TypeInfo(Kind.FLOAT, name=valuefmt.class_name(cls, qualify),
                        bits=bits, value=value)
    if isinstance(value, complex):
        return TypeInfo(Kind.COMPLEX, name="complex", bits=128, value=value)
    if isinstance(value, str):
        return TypeInfo(Kind.STRING, name="string", value=value)

    args = _declared_args(value, declared)

    if isinstance(value, (bytes, bytearray)):
        return _sequence(Kind.SLICE, value, lambda: ctypes.c_uint8)
    if isinstance(value, weakref.ref):
        return _describe_weakref(value, args, options)
    if isinstance(value, tuple):
        if hasattr(cls, "_fields"):
            return _describe_namedtuple(value, options)
        return _describe_tuple(value, args)
    if isinstance(value, (set, frozenset)):
        elem = args[0] if args else typing.Any
        return _sequence(Kind.SLICE, value, lambda: elem, unordered=True)
    if isinstance(value, collections.abc.Mapping):
        return _describe_mapping(value, args)
    if isinstance(value, _QUEUES):
        elem = args[0] if args else typing.Any
        return TypeInfo(Kind.CHANNEL, name=valuefmt.type_name(elem, qualify),
                        value=value, length=value.qsize(),
                        capacity=getattr(value, "maxsize", 0))
    if inspect.isroutine(value) or isinstance(value, functools.partial):
        return _describe_function(value, options)
    if dataclasses.is_dataclass(value):
        return _describe_dataclass(value, options)
    if isinstance(value, collections.abc.Sequence):
        elem = args[0] if args else typing.Any
        return _sequence(Kind.SLICE, value, lambda: elem)

    if cls.__module__ != "builtins":
        fields = _object_fields(value)
        if fields is not None:
            return _describe_object(value, fields, options)
    return TypeInfo(Kind.UNKNOWN, name=cls.__name__, value=value)


def _sequence(kind, value, elem_type, unordered=False):
    """Descriptor for a sequence whose items share one declared type."""
    def items():
        for item in value:
            yield item, elem_type()

    return valuefmt.TypeInfo(kind, value=value, identity=id(value),
                             unordered=unordered, iterate=items)


def _describe_tuple(value, args):
    if len(args) == 2 and args[1] is Ellipsis:
        types_ = [args[0]] * len(value)
    else:
        types_ = list(args[:len(value)])
        types_ += [typing.Any] * (len(value) - len(types_))

    def items():
        yield from zip(value, types_)

    return valuefmt.TypeInfo(valuefmt.Kind.ARRAY, value=value,
                             identity=id(value), iterate=items)


def _describe_mapping(value, args):
    if len(args) == 2:
        key_type, value_type = args
    else:
        key_type = value_type = typing.Any

    def entries():
        for key, item in value.items():
            yield key, key_type, item, value_type

    return valuefmt.TypeInfo(valuefmt.Kind.MAP, value=value,
                             identity=id(value), iterate=entries)


def _describe_weakref(value, args, options):
    Kind = valuefmt.Kind
    TypeInfo = valuefmt.TypeInfo
    target = value()
    if args:
        pointee = args[0]
    elif target is not None:
        pointee = type(target)
    else:
        pointee = object
    name = valuefmt.type_name(pointee, options.qualify_names)
    if target is None:
        return TypeInfo(Kind.POINTER, name=name, nil=True)
    return TypeInfo(Kind.POINTER, name=name, value=value, target=target,
                    target_type=args[0] if args else valuefmt.MISSING)


def _struct(value, fields, options):
    """Descriptor for a struct given a callable yielding its fields."""
    return valuefmt.TypeInfo(
        valuefmt.Kind.STRUCT,
        name=valuefmt.class_name(type(value), options.qualify_names),
        value=value, identity=id(value), iterate=fields)


def _describe_dataclass(value, options):
    hints = _type_hints(type(value))

    def fields():
        for field in dataclasses.fields(value):
            yield (field.name, getattr(value, field.name, valuefmt.MISSING),
                   hints.get(field.name, field.type))

    return _struct(value, fields, options)


def _describe_namedtuple(value, options):
    hints = _type_hints(type(value))

    def fields():
        for name, item in zip(type(value)._fields, value):
            yield name, item, hints.get(name, typing.Any)

    return _struct(value, fields, options)


def _object_fields(value):
    """Attribute names of a plain object, None when it has no attributes.

    Slots come first in base class order, then the instance dictionary in
    assignment order. Each entry pairs the name as written in the class
    with the attribute it is stored under, which differs for private
    ``__name`` slots.
    """
    fields = {}
    has_slots = False
    for klass in reversed(type(value).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            has_slots = True
            if name not in ("__dict__", "__weakref__") and name not in fields:
                fields[name] = _mangle(klass, name)
    attrs = getattr(value, "__dict__", None)
    if attrs is None and not has_slots:
        return None
    stored = set(fields.values())
    for name in attrs or ():
        if name not in fields and name not in stored:
            fields[name] = name
    return list(fields.items())


def _mangle(klass, name):
    """Attribute name Python stores a private class member under."""
    if not name.startswith("__") or name.endswith("__"):
        return name
    owner = klass.__name__.lstrip("_")
    if not owner:
        return name
    return f"_{owner}{name}"


def _describe_object(value, fields, options):
    hints = _type_hints(type(value))

    def items():
        for name, attr in fields:
            yield (name, getattr(value, attr, valuefmt.MISSING),
                   hints.get(name, hints.get(attr, typing.Any)))

    return _struct(value, items, options)


def _symbol(func):
    """Qualified name of a function for display."""
    if isinstance(func, functools.partial):
        return f"partial({_symbol(func.func)})"
    name = (getattr(func, "__qualname__", None)
            or getattr(func, "__name__", None)
            or type(func).__name__)
    module = getattr(func, "__module__", None)
    if module:
        return f"{module}.{name}"
    return name


def _signature(func, qualify):
    """Parameter type names and return text of a Python callable."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspection data take anything
        return ["...Any"], ""
    hints = _type_hints(func)

    params = []
    for param in sig.parameters.values():
        annotation = hints.get(param.name, param.annotation)
        if annotation is param.empty:
            name = "Any"
        else:
            name = valuefmt.type_name(annotation, qualify)
        if param.kind is param.VAR_POSITIONAL:
            name = f"...{name}"
        elif param.kind is param.VAR_KEYWORD:
            name = f"**{name}"
        params.append(name)
    ret = hints.get("return", sig.return_annotation)
    return params, valuefmt.returns_text(ret, qualify)


def _describe_function(value, options):
    params, returns = _signature(value, options.qualify_names)
    return valuefmt.TypeInfo(
        valuefmt.Kind.FUNCTION,
        name=f"func({', '.join(params)}){returns}",
        value=value, symbol=_symbol(value),
        params=tuple(params), returns=returns)
