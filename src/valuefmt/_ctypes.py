"""Descriptors for ctypes data.

ctypes values carry the fixed widths and C layouts the renderer reports in
type names: ``int32``, ``uint8``, ``float64``, structures in field
declaration order, pointers that may be NULL and raw ``void *`` addresses.
"""

__all__ = [
    "CDATA_TYPES",
    "is_cdata",
    "is_simple_ctype",
    "ctype_name",
    "describe_cdata",
    "describe_scalar",
    "struct_fields",
]

import ctypes

import valuefmt


CDATA_TYPES = (
    ctypes._SimpleCData,
    ctypes._Pointer,
    ctypes.Array,
    ctypes.Structure,
    ctypes.Union,
    ctypes._CFuncPtr,
)

_SIGNED = frozenset("bhilqn")
_UNSIGNED = frozenset("BHILQN")
_FLOATS = frozenset("fdg")
_COMPLEX = frozenset("FDG")
_NULL_NAMES = {"z": "char", "Z": "wchar"}


def is_cdata(value):
    """True when value is an instance of a ctypes data type."""
    return isinstance(value, CDATA_TYPES)


def is_simple_ctype(tp):
    """True when tp is a ctypes scalar type such as c_int32."""
    return isinstance(tp, type) and issubclass(tp, ctypes._SimpleCData)


def _scalar_kind(ctype):
    """Kind and type name for a ctypes scalar type."""
    Kind = valuefmt.Kind
    code = ctype._type_
    bits = ctypes.sizeof(ctype) * 8
    if code == "?":
        return Kind.BOOL, "bool", bits
    if code in _SIGNED:
        return Kind.INT, f"int{bits}", bits
    if code in _UNSIGNED or code == "c":
        return Kind.UINT, f"uint{bits}", bits
    if code in _FLOATS:
        return Kind.FLOAT, f"float{bits}", bits
    if code in _COMPLEX:
        return Kind.COMPLEX, "complex", bits
    if code in ("u", "z", "Z"):
        return Kind.STRING, "string", 0
    if code == "P":
        return Kind.RAW_POINTER, "Pointer", bits
    if code == "O":
        return Kind.VARIANT, "py_object", 0
    return Kind.UNKNOWN, ctype.__name__, bits


def ctype_name(tp):
    """Name of a ctypes type, or None when tp is not a ctypes type.

    Scalars are named by width ("int32"), pointers as "*T", arrays as
    "[N]T" and function pointers by their signature.
    """
    if not isinstance(tp, type) or not issubclass(tp, CDATA_TYPES):
        return None
    if issubclass(tp, ctypes._SimpleCData):
        kind, name, _ = _scalar_kind(tp)
        if kind is valuefmt.Kind.STRING and tp._type_ in _NULL_NAMES:
            return f"*{_NULL_NAMES[tp._type_]}"
        if kind is valuefmt.Kind.RAW_POINTER:
            return "*void"
        return name
    if issubclass(tp, ctypes._Pointer):
        return f"*{_pointee_name(tp)}"
    if issubclass(tp, ctypes.Array):
        return f"[{tp._length_}]{valuefmt.type_name(tp._type_)}"
    if issubclass(tp, ctypes._CFuncPtr):
        params, returns = _cfunc_signature(getattr(tp, "_argtypes_", None),
                                           getattr(tp, "_restype_", None))
        return f"func({', '.join(params)}){returns}"
    return tp.__name__


def _pointee_name(ptrtype):
    pointee = getattr(ptrtype, "_type_", None)
    if pointee is None:
        return "void"
    return valuefmt.type_name(pointee)


def _address(value):
    return (type(value), ctypes.addressof(value))


def describe_scalar(ctype, value):
    """Describe a Python value read from a field of a ctypes scalar type.

    Structure fields and array items of scalar types read back as plain
    Python values, the declared ctype supplies the width.

    Args:
        ctype: ctypes scalar type the value was declared as
        value: Python value, None for NULL char and void pointers

    Returns:
        (TypeInfo) Descriptor for the value
    """
    TypeInfo = valuefmt.TypeInfo
    Kind = valuefmt.Kind
    kind, name, bits = _scalar_kind(ctype)
    code = ctype._type_

    if kind is Kind.RAW_POINTER:
        return TypeInfo(kind, name=name, bits=bits, value=value or 0)
    if kind is Kind.VARIANT:
        return TypeInfo(kind, name=name, value=value, nil=value is None,
                        target=value)
    if value is None:
        return TypeInfo(Kind.POINTER, name=_NULL_NAMES.get(code, name), nil=True)
    if kind is Kind.STRING and isinstance(value, bytes):
        value = value.decode("utf-8", "backslashreplace")
    elif kind is Kind.UINT and isinstance(value, bytes):
        value = value[0] if value else 0
    return TypeInfo(kind, name=name, bits=bits, value=value)


def struct_fields(cls):
    """Field names and ctypes of a Structure or Union, bases first."""
    fields = []
    for klass in reversed(cls.__mro__):
        for entry in klass.__dict__.get("_fields_", ()):
            fields.append((entry[0], entry[1]))
    return fields


def _cfunc_signature(argtypes, restype):
    params = [valuefmt.type_name(arg) for arg in argtypes or ()]
    if restype is None:
        returns = ""
    else:
        returns = f" {valuefmt.type_name(restype)}"
    return params, returns


def describe_cdata(value, options):
    """Describe an instance of a ctypes data type.

    Args:
        value: ctypes instance
        options: (RenderOptions) Options of the current render

    Returns:
        (TypeInfo) Descriptor for the value
    """
    TypeInfo = valuefmt.TypeInfo
    Kind = valuefmt.Kind
    ctype = type(value)

    if isinstance(value, ctypes._SimpleCData):
        if ctype._type_ == "O":
            try:
                payload = value.value
            except ValueError:
                payload = None
            return describe_scalar(ctype, payload)
        return describe_scalar(ctype, value.value)

    if isinstance(value, ctypes._Pointer):
        name = _pointee_name(ctype)
        if not value:
            return TypeInfo(Kind.POINTER, name=name, nil=True)
        return TypeInfo(Kind.POINTER, name=name, value=value,
                        target=value.contents, target_type=ctype._type_)

    if isinstance(value, ctypes.Array):
        elem = ctype._type_

        def items():
            for index in range(len(value)):
                yield value[index], elem

        return TypeInfo(Kind.ARRAY, name=ctype_name(ctype), value=value,
                        identity=_address(value), iterate=items)

    if isinstance(value, (ctypes.Structure, ctypes.Union)):

        def fields():
            for name, ftype in struct_fields(ctype):
                yield name, getattr(value, name), ftype

        return TypeInfo(Kind.STRUCT,
                        name=valuefmt.class_name(ctype, options.qualify_names),
                        value=value, identity=_address(value), iterate=fields)

    # Function pointers, from a library or wrapping a Python callback
    params, returns = _cfunc_signature(getattr(value, "argtypes", None),
                                       getattr(value, "restype", None))
    signature = f"func({', '.join(params)}){returns}"
    if not value:
        return TypeInfo(Kind.FUNCTION, name=signature, nil=True)
    return TypeInfo(Kind.FUNCTION, name=signature, value=value,
                    symbol=getattr(value, "__name__", "cfunc"),
                    params=tuple(params), returns=returns)
