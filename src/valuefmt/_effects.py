"""Ordered lists of fallible write operations.

The renderer interleaves literal punctuation with nested renders. Each
piece is queued as a zero argument operation and the queue runs in order,
stopping at the first operation that raises.
"""

__all__ = ["run_all", "EffectList"]

import functools


def run_all(*ops):
    """Run operations in order until one fails.

    Entries that are None are skipped. The exception raised by the first
    failing operation propagates unchanged and no later operation runs.

    Args:
        *ops: Zero argument callables, or None
    """
    for op in ops:
        if op is None:
            continue
        op()


class EffectList:
    """Builder for a queue of deferred writes and nested calls.

    Args:
        write: Callable taking the text to write to the sink
    """
    __slots__ = ("_write", "_ops")

    def __init__(self, write):
        self._write = write
        self._ops = []

    def __len__(self):
        return len(self._ops)

    def add(self, op):
        """Queue an operation, None queues nothing to run."""
        self._ops.append(op)
        return self

    def text(self, text):
        """Queue literal text."""
        return self.add(functools.partial(self._write, text))

    def indent(self, ctx):
        """Queue the indentation for a render context."""
        prefix = ctx.prefix
        return self.add(functools.partial(self._write, prefix) if prefix else None)

    def call(self, func, *args):
        """Queue a call, usually a nested render."""
        return self.add(functools.partial(func, *args))

    def run(self):
        """Run the queued operations, see `run_all`."""
        run_all(*self._ops)
