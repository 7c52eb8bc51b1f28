"""Recursive renderer from values to indented, typed text.

Every value renders by its kind. Scalars are wrapped in their type name,
``int32{4}``. Containers open a bracket, render each child on its own line
one indent deeper, and close the bracket at their own depth::

    A{
        VInt: int{1},
        Tags: [
            string{"x"},
        ],
    }

Writes go straight to the sink. A failing write raises SinkError and
aborts the whole render, leaving earlier output in the sink.
"""

__all__ = ["RenderContext", "Renderer", "render", "format_value", "CYCLE"]

import dataclasses
import io
import logging
from dataclasses import dataclass

import valuefmt


_log = logging.getLogger(__name__)

CYCLE = "<cycle>"
NIL = "<nil>"


@dataclass(frozen=True)
class RenderContext:
    """Indent unit and depth for one level of the render.

    Attributes:
        indent: (str) Text repeated once per level
        depth: (int) Nesting level, 0 at the top
    """
    indent: str = "    "
    depth: int = 0

    @property
    def prefix(self):
        """(str) Indentation text at this depth."""
        return self.indent * self.depth

    def nested(self):
        """Context one level deeper."""
        return dataclasses.replace(self, depth=self.depth + 1)


class Renderer:
    """Writes rendered values into a sink.

    A renderer tracks the containers on the path being rendered so that
    self-referential values end in a cycle marker. Use one renderer per
    top-level render.

    Args:
        sink: Object with a `write(text)` method
        options: (RenderOptions | None) Rendering options
    """

    def __init__(self, sink, options=None):
        self.sink = sink
        self.options = options or valuefmt.DEFAULT_OPTIONS
        self._path = set()

    def context(self):
        """Top-level context for this renderer's options."""
        return RenderContext(self.options.indent, 0)

    def write(self, text):
        """Write text to the sink, raising SinkError when the sink fails."""
        try:
            self.sink.write(text)
        except (OSError, ValueError) as err:
            _log.debug("sink %r failed after partial output: %s", self.sink, err)
            raise valuefmt.SinkError(f"writing to sink failed: {err}") from err

    def effects(self):
        """New effect list writing through this renderer."""
        return valuefmt.EffectList(self.write)

    def render(self, value, ctx=None, declared=valuefmt.MISSING):
        """Render a value at the depth of ctx.

        Args:
            value: Value to render
            ctx: (RenderContext | None) Current context, top-level when None
            declared: Type the value was declared as
        """
        if ctx is None:
            ctx = self.context()
        info = valuefmt.describe(value, declared, self.options)
        self.render_info(info, ctx)

    def render_info(self, info, ctx):
        """Render a value that already has its type descriptor."""
        Kind = valuefmt.Kind
        match info.kind:
            case Kind.INVALID:
                self.write("<invalid>")
            case Kind.BOOL:
                self.write(f"bool{{{'true' if info.value else 'false'}}}")
            case Kind.INT | Kind.UINT:
                self.write(f"{info.name}{{{int(info.value)}}}")
            case Kind.FLOAT:
                self.write(f"{info.name}{{{_number_text(info.value)}}}")
            case Kind.COMPLEX:
                self.write(f"complex{{{_complex_text(info.value)}}}")
            case Kind.STRING:
                self.write(f"string{{{valuefmt.quote(info.value)}}}")
            case Kind.VARIANT:
                self._render_variant(info, ctx)
            case Kind.POINTER:
                self._render_pointer(info, ctx)
            case Kind.ARRAY | Kind.SLICE:
                self._render_sequence(info, ctx)
            case Kind.MAP:
                self._render_map(info, ctx)
            case Kind.FUNCTION:
                self._render_function(info)
            case Kind.CHANNEL:
                self._render_channel(info)
            case Kind.STRUCT:
                self._render_struct(info, ctx)
            case Kind.RAW_POINTER:
                self.write(f"Pointer({info.value:x})")
            case Kind.UNKNOWN:
                self.write(f"UnknownKind({info.name})")
            case _:
                raise valuefmt.RenderError(f"No rendering rule for {info.kind!r}")

    def _guarded(self, info, fx):
        """Run a container's effects unless it is already being rendered."""
        key = info.identity
        if not self.options.detect_cycles or key is None:
            fx.run()
            return
        if key in self._path:
            self.write(CYCLE)
            return
        self._path.add(key)
        try:
            fx.run()
        finally:
            self._path.discard(key)

    def _sort_text(self, value, declared):
        """Rendered text of a value, used to order unordered children."""
        buf = io.StringIO()
        Renderer(buf, self.options).render(value, declared=declared)
        return buf.getvalue()

    def _render_variant(self, info, ctx):
        if info.nil:
            self.write(f"{info.name}({NIL})")
            return
        inner = ctx.nested()
        fx = self.effects()
        fx.text(info.name).text("(\n")
        fx.indent(inner).call(self.render, info.target, inner, info.target_type)
        fx.text("\n").indent(ctx).text(")")
        fx.run()

    def _render_pointer(self, info, ctx):
        if info.nil:
            self.write(f"(*{info.name})({NIL})")
            return
        # Dereferencing stays at the same depth
        fx = self.effects()
        fx.text("&").call(self.render, info.target, ctx, info.target_type)
        fx.run()

    def _render_sequence(self, info, ctx):
        items = list(info.children())
        if info.unordered:
            items.sort(key=lambda item: self._sort_text(*item))
        inner = ctx.nested()
        fx = self.effects()
        fx.text("[\n")
        for item, declared in items:
            fx.indent(inner).call(self.render, item, inner, declared).text(",\n")
        fx.indent(ctx).text("]")
        self._guarded(info, fx)

    def _render_map(self, info, ctx):
        if info.nil:
            self.write(f"map({NIL})")
            return
        entries = list(info.children())
        if self.options.sort_maps:
            entries.sort(key=lambda entry: self._sort_text(entry[0], entry[1]))
        inner = ctx.nested()
        fx = self.effects()
        fx.text("map{\n")
        for key, key_type, value, value_type in entries:
            fx.indent(inner).call(self.render, key, inner, key_type)
            fx.text(": ").call(self.render, value, inner, value_type)
            fx.text(",\n")
        fx.indent(ctx).text("}")
        self._guarded(info, fx)

    def _render_struct(self, info, ctx):
        inner = ctx.nested()
        fx = self.effects()
        fx.text(info.name).text("{\n")
        for name, value, declared in info.children():
            fx.indent(inner).text(name).text(": ")
            fx.call(self.render, value, inner, declared).text(",\n")
        fx.indent(ctx).text("}")
        self._guarded(info, fx)

    def _render_function(self, info):
        if info.nil:
            self.write(f"({info.name})({NIL})")
            return
        fx = self.effects()
        fx.text("func ").text(info.symbol).text("(")
        for index, param in enumerate(info.params):
            if index:
                fx.text(", ")
            fx.text(param)
        fx.text(")")
        if info.returns:
            fx.text(info.returns)
        fx.run()

    def _render_channel(self, info):
        fx = self.effects()
        fx.text("chan ").text(info.name)
        fx.text("{len=").text(str(info.length))
        fx.text(",cap=").text(str(info.capacity)).text("}")
        fx.run()


def _number_text(value):
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _complex_text(value):
    """Real and imaginary parts, both always shown: (0+1j), (-0-2.5j)."""
    value = complex(value)
    real = _part_text(value.real)
    imag = _part_text(value.imag)
    if not imag.startswith("-"):
        imag = "+" + imag
    return f"({real}{imag}j)"


def _part_text(part):
    text = repr(part)
    if text.endswith(".0"):
        return text[:-2]
    return text


def render(value, sink, options=None, declared=valuefmt.MISSING, **overrides):
    """Render a value into a sink.

    Args:
        value: Value to render
        sink: Object with a `write(text)` method
        options: (RenderOptions | None) Base rendering options
        declared: Type the value was declared as, MISSING for its own type
        **overrides: RenderOptions fields to change

    Raises:
        SinkError: A write to the sink failed, the render stops there
    """
    options = valuefmt.resolve_options(options, **overrides)
    renderer = Renderer(sink, options)
    renderer.render(value, declared=declared)


def format_value(value, options=None, declared=valuefmt.MISSING, **overrides):
    """Render a value to text.

    Takes the same arguments as `render`. The text produced before any
    failure is returned, no error is raised for the output.

    Returns:
        (str) Rendered text
    """
    buf = io.StringIO()
    try:
        render(value, buf, options, declared, **overrides)
    except valuefmt.SinkError as err:
        _log.debug("format_value returning partial text: %s", err)
    return buf.getvalue()
