"""libanim - decoder for the binary animation (mesh + skeleton) file format."""

from .config import DEFAULT_OPTIONS, DecodeOptions, load_config
from .errors import (
    AnimReadError,
    DanglingReference,
    InvalidTopology,
    InvalidUtf8,
    MalformedCount,
    UnexpectedEof,
)
from .model import AnimationFile, Joint, JointRecord, Mesh, Quat, Skeleton, Vec3
from .reader import read_anim, read_anim_bytes, read_anim_stream
from .writer import encode_anim, write_anim

__all__ = [
    "AnimationFile", "Mesh", "Joint", "JointRecord", "Skeleton", "Vec3", "Quat",
    "read_anim", "read_anim_bytes", "read_anim_stream",
    "encode_anim", "write_anim",
    "DecodeOptions", "DEFAULT_OPTIONS", "load_config",
    "AnimReadError", "UnexpectedEof", "MalformedCount", "InvalidUtf8",
    "InvalidTopology", "DanglingReference",
]
