"""libanim.writer

Canonical animation file writer.

The reader expands quads into triangles, so the original quad buffers are
gone after a decode. The writer therefore emits every face set with an empty
quad array and its full triangle list. Decoding the output yields the same
meshes and skeleton; it is not byte-identical to a file that had quads.

UVs are re-quantized with round(uv * uv_scale), clamped to the i16 range.
"""

from __future__ import annotations

import struct
from typing import List, Optional, Sequence

from .config import DEFAULT_OPTIONS, DecodeOptions
from .model import AnimationFile, Mesh, Skeleton


def _pod(code: str, values: Sequence) -> bytes:
    return struct.pack(f"<i{len(values)}{code}", len(values), *values)


def _encode_mesh(mesh: Mesh, uv_scale: float) -> bytes:
    uv_fixed = [max(-32768, min(32767, int(round(uv * uv_scale)))) for uv in mesh.uvs]
    parts: List[bytes] = [
        _pod("f", mesh.vertices),
        _pod("h", uv_fixed),
        _pod("f", mesh.normals),
        struct.pack("<i", len(mesh.elements)),
    ]
    for material_index, tris in mesh.elements.items():
        parts.append(struct.pack("<I", material_index))
        parts.append(_pod("H", ()))
        parts.append(_pod("H", tris))
    parts.append(_pod("f", mesh.skin_weights))
    parts.append(_pod("h", mesh.skin_indices))
    return b"".join(parts)


def _encode_skeleton(skeleton: Skeleton) -> bytes:
    if len(skeleton) > 0x7FFF:
        raise ValueError(f"{len(skeleton)} joints do not fit an i16 parent index")
    parts: List[bytes] = [struct.pack("<i", len(skeleton))]
    for joint in skeleton:
        name = joint.name.encode("utf-8")
        if len(name) > 0xFFFF:
            raise ValueError(f"Joint name {joint.name[:32]!r}... is {len(name)} bytes, limit is 65535")
        parent = -1 if joint.parent is None else joint.parent
        parts.append(struct.pack("<hH", parent, len(name)))
        parts.append(name)
        parts.append(struct.pack("<4f", *joint.rotation))
        parts.append(struct.pack("<3f", *joint.translation))
    return b"".join(parts)


def encode_anim(anim: AnimationFile, options: Optional[DecodeOptions] = None) -> bytes:
    opts = options or DEFAULT_OPTIONS
    parts: List[bytes] = [struct.pack("<ii", anim.version, len(anim.meshes))]
    parts += [_encode_mesh(m, opts.uv_scale) for m in anim.meshes]
    parts.append(struct.pack("<i", anim.influences_per_vertex))
    parts.append(_encode_skeleton(anim.skeleton))
    return b"".join(parts)


def write_anim(anim: AnimationFile, out_path: str, options: Optional[DecodeOptions] = None) -> None:
    """Write an AnimationFile to disk in canonical form."""

    data = encode_anim(anim, options)
    with open(out_path, "wb") as f:
        f.write(data)
