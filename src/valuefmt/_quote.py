"""Quoting of text values"""

__all__ = ["quote"]


_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def quote(text):
    """Wrap text in double quotes with escapes for unprintable characters.

    Printable characters outside ASCII are kept as they are. Other control
    and format characters use the shortest of the \\x, \\u and \\U escapes
    that can hold them.

    Args:
        text: (str) Text to quote

    Returns:
        (str) Quoted text
    """
    out = ['"']
    for ch in text:
        escape = _ESCAPES.get(ch)
        if escape is not None:
            out.append(escape)
        elif ch.isprintable():
            out.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code <= 0xFFFF:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)
