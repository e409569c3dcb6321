"""libanim.stream

Sequential little-endian reader over any object with `read(n)`.

Unlike an in-memory cursor, a stream may hand back fewer bytes than asked
for, so `Bin.read` keeps calling the source until the request is satisfied
or the source reports end-of-stream (an empty result).
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Optional

from .config import DEFAULT_OPTIONS, DecodeOptions
from .errors import InvalidUtf8, UnexpectedEof

_S16 = struct.Struct("<h")
_U16 = struct.Struct("<H")
_S32 = struct.Struct("<i")
_U32 = struct.Struct("<I")
_F32 = struct.Struct("<f")


class Bin:
    __slots__ = ("stream", "options", "ofs")

    def __init__(self, stream: BinaryIO, options: Optional[DecodeOptions] = None):
        self.stream = stream
        self.options = options or DEFAULT_OPTIONS
        self.ofs = 0

    @classmethod
    def from_bytes(cls, data: bytes, options: Optional[DecodeOptions] = None) -> "Bin":
        return cls(io.BytesIO(data), options)

    def tell(self) -> int:
        """Bytes consumed so far."""
        return self.ofs

    def read(self, n: int) -> bytes:
        if n == 0:
            return b""
        step = self.options.read_chunk_size
        parts = []
        got = 0
        while got < n:
            chunk = self.stream.read(min(n - got, step))
            if not chunk:
                raise UnexpectedEof(f"Unexpected EOF, need {n} bytes, got {got}", self.ofs)
            parts.append(chunk)
            got += len(chunk)
        self.ofs += n
        return parts[0] if len(parts) == 1 else b"".join(parts)

    def s16(self) -> int:
        return _S16.unpack(self.read(2))[0]

    def u16(self) -> int:
        return _U16.unpack(self.read(2))[0]

    def s32(self) -> int:
        return _S32.unpack(self.read(4))[0]

    def u32(self) -> int:
        return _U32.unpack(self.read(4))[0]

    def f32(self) -> float:
        return _F32.unpack(self.read(4))[0]

    def lstr(self) -> str:
        """u16 byte length followed by that many UTF-8 bytes."""
        length = self.u16()
        start = self.ofs
        raw = self.read(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidUtf8(f"String of {length} bytes is not valid UTF-8: {e.reason}", start) from e
