"""libanim.skeleton

Joint table decoding and hierarchy reconstruction.

The file stores joints as a flat table where each record names its parent by
table index (-1 for a root). Parents may come before or after their
children, so the table is read completely first and linked afterwards.

Linking walks parent links with an explicit chain instead of recursion:

    UNBUILT -> VISITING (on the current chain) -> BUILT

Stepping onto a VISITING slot means the chain loops back on itself, which is
reported as DanglingReference rather than walking forever.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .arrays import read_records
from .errors import DanglingReference
from .model import Joint, JointRecord, Quat, Skeleton, Vec3
from .stream import Bin

logger = logging.getLogger(__name__)

UNBUILT, VISITING, BUILT = 0, 1, 2


def read_vec3(b: Bin) -> Vec3:
    return Vec3(b.f32(), b.f32(), b.f32())


def read_quat(b: Bin) -> Quat:
    return Quat(b.f32(), b.f32(), b.f32(), b.f32())


def read_joint_record(b: Bin) -> JointRecord:
    parent_idx = b.s16()
    name = b.lstr()
    rotation = read_quat(b)
    translation = read_vec3(b)
    return JointRecord(parent_idx=parent_idx, name=name, rotation=rotation, translation=translation)


def build_skeleton(records: Sequence[JointRecord]) -> Skeleton:
    n = len(records)
    state = [UNBUILT] * n
    joints: List[Optional[Joint]] = [None] * n

    for start in range(n):
        if state[start] == BUILT:
            continue

        # Walk up until a root or an already built joint.
        chain: List[int] = []
        i = start
        while state[i] != BUILT:
            if state[i] == VISITING:
                loop = chain[chain.index(i):] + [i]
                raise DanglingReference(
                    f"joint {start} ({records[start].name!r}): parent cycle "
                    + " -> ".join(str(k) for k in loop)
                )
            state[i] = VISITING
            chain.append(i)
            parent = records[i].parent_idx
            if parent == -1:
                break
            if not 0 <= parent < n:
                raise DanglingReference(
                    f"joint {i} ({records[i].name!r}): parent index {parent} outside table of {n}"
                )
            i = parent

        # Build parent-first.
        for i in reversed(chain):
            rec = records[i]
            if rec.parent_idx == -1:
                parent, depth = None, 0
            else:
                parent, depth = rec.parent_idx, joints[rec.parent_idx].depth + 1
            joints[i] = Joint(
                index=i,
                name=rec.name,
                rotation=rec.rotation,
                translation=rec.translation,
                parent=parent,
                depth=depth,
            )
            state[i] = BUILT

    return Skeleton(joints=tuple(joints))


def read_skeleton(b: Bin) -> Skeleton:
    records = read_records(b, read_joint_record, label="joint")
    skeleton = build_skeleton(records)
    logger.debug("skeleton: %d joints, %d roots", len(skeleton), len(skeleton.roots()))
    return skeleton
