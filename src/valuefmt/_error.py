"""Error classes raised while rendering"""

__all__ = ["SinkError", "RenderError"]


class SinkError(OSError):
    """Writing rendered text to the output sink failed.

    The exception raised by the sink is chained as ``__cause__``. Text
    written before the failure stays in the sink.
    """


class RenderError(Exception):
    """Internal error in the renderer.

    Only raised by `Renderer.render_info` for a malformed descriptor built
    by hand, one whose kind is not a member of `Kind`. Descriptors made by
    `describe` always have a rendering rule.
    """
