"""libanim.arrays

Length-prefixed arrays: `i32 count` followed by the elements.

Fixed-width numeric kinds are read as a single block and unpacked with
struct. Anything else goes through `read_records`, which calls the element's
own decoder once per element.
"""

from __future__ import annotations

import struct
from contextlib import nullcontext
from typing import Callable, NamedTuple, Optional, Tuple, TypeVar

from .errors import MalformedCount, stage
from .stream import Bin

T = TypeVar("T")


class PodKind(NamedTuple):
    name: str
    code: str   # struct format character
    width: int  # bytes per element


F32 = PodKind("f32", "f", 4)
S16 = PodKind("i16", "h", 2)
U16 = PodKind("u16", "H", 2)


def read_count(b: Bin) -> int:
    ofs = b.tell()
    count = b.s32()
    if count < 0:
        raise MalformedCount(f"Negative element count {count}", ofs)
    limit = b.options.max_array_count
    if limit and count > limit:
        raise MalformedCount(f"Element count {count} exceeds configured limit {limit}", ofs)
    return count


def read_pod_array(b: Bin, kind: PodKind) -> Tuple:
    count = read_count(b)
    if count == 0:
        return ()
    raw = b.read(count * kind.width)
    return struct.unpack(f"<{count}{kind.code}", raw)


def read_records(b: Bin, decode: Callable[[Bin], T], label: Optional[str] = None) -> Tuple[T, ...]:
    """Decode `count` composite records in order.

    With `label`, an error from element i is tagged "<label> i".
    """
    with stage(f"{label} count") if label else nullcontext():
        count = read_count(b)
    items = []
    for i in range(count):
        with stage(f"{label} {i}") if label else nullcontext():
            items.append(decode(b))
    return tuple(items)
