"""libanim.reader

Animation file reader.

Layout (little-endian, no magic, no padding):

    i32 version
    i32 mesh_count             Mesh * mesh_count
    i32 influences_per_vertex
    i32 joint_count            JointRecord * joint_count

Anything after the skeleton is ignored. The version is stored but not
interpreted.

Decoding is all-or-nothing: the AnimationFile is only constructed once every
section has been read, so a failure never leaves a half-filled result behind.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Optional

from .arrays import read_records
from .config import DecodeOptions
from .errors import stage
from .mesh import read_mesh
from .model import AnimationFile
from .skeleton import read_skeleton
from .stream import Bin

logger = logging.getLogger(__name__)


def _read_anim(b: Bin) -> AnimationFile:
    with stage("version"):
        version = b.s32()
    meshes = read_records(b, read_mesh, label="mesh")
    with stage("influences_per_vertex"):
        influences = b.s32()
    with stage("skeleton"):
        skeleton = read_skeleton(b)

    logger.debug(
        "decoded version=%d meshes=%d influences=%d joints=%d (%d bytes)",
        version, len(meshes), influences, len(skeleton), b.tell(),
    )
    return AnimationFile(
        version=version,
        meshes=meshes,
        influences_per_vertex=influences,
        skeleton=skeleton,
    )


def read_anim_stream(stream: BinaryIO, options: Optional[DecodeOptions] = None) -> AnimationFile:
    """Decode from anything with `read(n)` returning b"" at end of stream."""
    return _read_anim(Bin(stream, options))


def read_anim_bytes(data: bytes, options: Optional[DecodeOptions] = None) -> AnimationFile:
    b = Bin.from_bytes(data, options)
    anim = _read_anim(b)
    trailing = len(data) - b.tell()
    if trailing:
        logger.debug("ignoring %d trailing bytes", trailing)
    return anim


def read_anim(path: str, options: Optional[DecodeOptions] = None) -> AnimationFile:
    with open(path, "rb") as f:
        return read_anim_stream(f, options)
