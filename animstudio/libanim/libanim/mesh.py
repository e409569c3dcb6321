"""libanim.mesh

Mesh records and their per-material face sets.

Field order inside a mesh is fixed:

    vertices      Array<f32>
    uv_fixed      Array<i16>   (value / uv_scale -> float uv)
    normals       Array<f32>
    face sets     i32 count, then {u32 material, Array<u16> quads, Array<u16> triangles}
    skin_weights  Array<f32>
    skin_indices  Array<i16>

No cross-field checks happen here (e.g. skin weight count vs vertex count).
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple

from .arrays import F32, S16, U16, read_count, read_pod_array
from .errors import InvalidTopology, stage
from .model import Mesh
from .stream import Bin

logger = logging.getLogger(__name__)


def expand_quads(quads: Sequence[int]) -> List[int]:
    """Split each quad (q0, q1, q2, q3) into (q0, q1, q3) and (q1, q2, q3)."""
    if len(quads) % 4:
        raise InvalidTopology(f"quad index count {len(quads)} is not a multiple of 4")
    out: List[int] = []
    for i in range(0, len(quads), 4):
        q0, q1, q2, q3 = quads[i:i + 4]
        out += (q0, q1, q3, q1, q2, q3)
    return out


def read_face_set(b: Bin) -> Tuple[int, Tuple[int, ...]]:
    material_index = b.u32()
    with stage("quads"):
        quads_ofs = b.tell()
        quads = read_pod_array(b, U16)
        if len(quads) % 4:
            raise InvalidTopology(f"quad index count {len(quads)} is not a multiple of 4", quads_ofs)
    with stage("triangles"):
        triangles = read_pod_array(b, U16)
    # explicit triangles first, then the ones made from quads
    return material_index, triangles + tuple(expand_quads(quads))


def read_face_sets(b: Bin) -> Mapping[int, Tuple[int, ...]]:
    with stage("face set count"):
        count = read_count(b)
    elements: Dict[int, Tuple[int, ...]] = {}
    for i in range(count):
        with stage(f"face set {i}"):
            material_index, tris = read_face_set(b)
        if material_index in elements and b.options.warn_on_material_collision:
            logger.warning(
                "face set %d reuses material index %d; replacing %d earlier indices with %d",
                i, material_index, len(elements[material_index]), len(tris),
            )
        elements[material_index] = tris
    return MappingProxyType(elements)


def read_mesh(b: Bin) -> Mesh:
    with stage("vertices"):
        vertices = read_pod_array(b, F32)
    with stage("uvs"):
        scale = b.options.uv_scale
        uvs = tuple(v / scale for v in read_pod_array(b, S16))
    with stage("normals"):
        normals = read_pod_array(b, F32)
    elements = read_face_sets(b)
    with stage("skin_weights"):
        skin_weights = read_pod_array(b, F32)
    with stage("skin_indices"):
        skin_indices = read_pod_array(b, S16)

    logger.debug(
        "mesh: %d vertex floats, %d uv, %d normal floats, %d face sets, %d skin weights",
        len(vertices), len(uvs), len(normals), len(elements), len(skin_weights),
    )
    return Mesh(
        vertices=vertices,
        uvs=uvs,
        normals=normals,
        elements=elements,
        skin_weights=skin_weights,
        skin_indices=skin_indices,
    )
