"""Rendering options"""

__all__ = ["RenderOptions", "DEFAULT_OPTIONS", "resolve_options"]

import dataclasses
from dataclasses import dataclass


@dataclass(frozen=True)
class RenderOptions:
    """Settings shared by every level of one render.

    Attributes:
        indent: (str) Text repeated once per nesting level
        sort_maps: (bool) Order map entries by the rendered text of their keys
        detect_cycles: (bool) Render "<cycle>" for a container already being
            rendered further up, instead of recursing forever
        qualify_names: (bool) Prefix class names with their module
    """
    indent: str = "    "
    sort_maps: bool = False
    detect_cycles: bool = True
    qualify_names: bool = False

    def __post_init__(self):
        if not isinstance(self.indent, str):
            raise TypeError(f"indent must be text, got {type(self.indent).__name__}")


DEFAULT_OPTIONS = RenderOptions()


def resolve_options(options=None, **overrides):
    """Combine an options object with keyword overrides.

    Args:
        options: (RenderOptions | None) Base options, defaults when None
        **overrides: Field values replacing those of the base options

    Returns:
        (RenderOptions) Options to render with
    """
    if options is None:
        options = DEFAULT_OPTIONS
    if overrides:
        options = dataclasses.replace(options, **overrides)
    return options
