"""libanim.errors

Error kinds raised while decoding an animation file.

Every decoder raises one of the subclasses of AnimReadError. Decoding steps
are wrapped in `stage(...)` so that by the time an error reaches the caller
its message names where in the file it happened, e.g.

    mesh 1 > face set 0: quad index count 6 is not a multiple of 4 (offset 123)

The concrete class is never changed on the way up, so callers can still
catch e.g. InvalidTopology directly.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional


class AnimReadError(RuntimeError):
    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.stages: List[str] = []

    def __str__(self) -> str:
        text = self.message
        if self.offset is not None:
            text = f"{text} (offset {self.offset})"
        if self.stages:
            text = " > ".join(self.stages) + ": " + text
        return text


class UnexpectedEof(AnimReadError):
    """Source ran out before a field or array was complete."""


class MalformedCount(AnimReadError):
    """A length prefix was negative (or above the configured limit)."""


class InvalidUtf8(AnimReadError):
    """String bytes are not valid UTF-8."""


class InvalidTopology(AnimReadError):
    """Quad index buffer length is not a multiple of 4."""


class DanglingReference(AnimReadError):
    """Joint parent index is out of range or part of a cycle."""


@contextmanager
def stage(name: str) -> Iterator[None]:
    """Label any AnimReadError raised inside the block with `name`."""
    try:
        yield
    except AnimReadError as e:
        e.stages.insert(0, name)
        raise
