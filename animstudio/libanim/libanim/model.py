from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple, Union


# -----------------------------
# High-level, stable DTOs used by summarize_anim
# -----------------------------

@dataclass
class AnimMeshInfo:
    index: int
    vertex_count: int
    uv_count: int
    normal_count: int
    material_count: int
    triangle_count: int
    skin_weight_count: int

@dataclass
class AnimSummary:
    path: str
    file_size: int
    version: int
    influences_per_vertex: int
    meshes: List[AnimMeshInfo]
    joint_count: int
    root_names: List[str]
    max_depth: int


# -----------------------------
# Decoded model
#
# Everything below is built once by libanim.reader and never mutated.
# Flat float arrays stay flat (as in the file); Mesh.vertex_count etc.
# interpret the grouping.
# -----------------------------


class Vec3(NamedTuple):
    x: float
    y: float
    z: float


class Quat(NamedTuple):
    """Rotation, components in file order (vector part first, then w)."""

    x: float
    y: float
    z: float
    w: float


@dataclass(frozen=True)
class Mesh:
    vertices: Tuple[float, ...]
    uvs: Tuple[float, ...]
    normals: Tuple[float, ...]
    # material index -> triangle list (3 u16 vertex indices per triangle);
    # read_mesh hands out a read-only view
    elements: Mapping[int, Tuple[int, ...]]
    skin_weights: Tuple[float, ...]
    skin_indices: Tuple[int, ...]

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // 3

    @property
    def triangle_count(self) -> int:
        return sum(len(tris) for tris in self.elements.values()) // 3

    @property
    def materials(self) -> List[int]:
        return sorted(self.elements)


@dataclass(frozen=True)
class JointRecord:
    """A joint as stored in the file, before the hierarchy is resolved."""

    parent_idx: int  # -1 = root
    name: str
    rotation: Quat
    translation: Vec3


@dataclass(frozen=True)
class Joint:
    index: int
    name: str
    rotation: Quat
    translation: Vec3
    parent: Optional[int] = None  # index into the owning Skeleton
    depth: int = 0

    @property
    def is_root(self) -> bool:
        return self.parent is None


JointRef = Union[Joint, int]


@dataclass(frozen=True)
class Skeleton:
    """Joint table, index-aligned with the joint records in the file."""

    joints: Tuple[Joint, ...] = ()

    def __len__(self) -> int:
        return len(self.joints)

    def __getitem__(self, index: int) -> Joint:
        return self.joints[index]

    def __iter__(self) -> Iterator[Joint]:
        return iter(self.joints)

    def _index(self, ref: JointRef) -> int:
        return ref.index if isinstance(ref, Joint) else ref

    def parent_of(self, ref: JointRef) -> Optional[Joint]:
        parent = self.joints[self._index(ref)].parent
        return None if parent is None else self.joints[parent]

    def child_indices(self) -> Dict[int, List[int]]:
        """Parent index -> child indices, children in table order."""
        children: Dict[int, List[int]] = {}
        for j in self.joints:
            if j.parent is not None:
                children.setdefault(j.parent, []).append(j.index)
        return children

    def children_of(self, ref: JointRef) -> List[Joint]:
        i = self._index(ref)
        return [self.joints[c] for c in self.child_indices().get(i, [])]

    def roots(self) -> List[Joint]:
        return [j for j in self.joints if j.parent is None]

    def find(self, name: str) -> Optional[Joint]:
        for j in self.joints:
            if j.name == name:
                return j
        return None

    @property
    def max_depth(self) -> int:
        return max((j.depth for j in self.joints), default=-1)


@dataclass(frozen=True)
class AnimationFile:
    version: int
    meshes: Tuple[Mesh, ...]
    influences_per_vertex: int
    skeleton: Skeleton = field(default_factory=Skeleton)
