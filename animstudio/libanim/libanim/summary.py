from __future__ import annotations

import os
from typing import Any, Dict, Optional

from .config import DecodeOptions
from .model import AnimationFile, AnimMeshInfo, AnimSummary, Joint, Mesh
from .reader import read_anim


def _mesh_info(index: int, mesh: Mesh) -> AnimMeshInfo:
    return AnimMeshInfo(
        index=index,
        vertex_count=mesh.vertex_count,
        uv_count=len(mesh.uvs) // 2,
        normal_count=len(mesh.normals) // 3,
        material_count=len(mesh.elements),
        triangle_count=mesh.triangle_count,
        skin_weight_count=len(mesh.skin_weights),
    )


def summarize(anim: AnimationFile, path: str = "", file_size: int = 0) -> AnimSummary:
    skel = anim.skeleton
    return AnimSummary(
        path=path,
        file_size=file_size,
        version=anim.version,
        influences_per_vertex=anim.influences_per_vertex,
        meshes=[_mesh_info(i, m) for i, m in enumerate(anim.meshes)],
        joint_count=len(skel),
        root_names=[j.name for j in skel.roots()],
        max_depth=skel.max_depth,
    )


def summarize_anim(path: str, options: Optional[DecodeOptions] = None) -> AnimSummary:
    size = os.path.getsize(path)
    return summarize(read_anim(path, options), path=path, file_size=size)


def _joint_to_dict(joint: Joint) -> Dict[str, Any]:
    return {
        "index": joint.index,
        "name": joint.name,
        "parent": joint.parent,
        "depth": joint.depth,
        "rotation": list(joint.rotation),
        "translation": list(joint.translation),
    }


def anim_to_dict(anim: AnimationFile) -> Dict[str, Any]:
    """JSON-ready view of a decoded file (material keys become strings)."""
    return {
        "version": anim.version,
        "influences_per_vertex": anim.influences_per_vertex,
        "meshes": [
            {
                "vertices": list(m.vertices),
                "uvs": list(m.uvs),
                "normals": list(m.normals),
                "elements": {str(k): list(v) for k, v in m.elements.items()},
                "skin_weights": list(m.skin_weights),
                "skin_indices": list(m.skin_indices),
            }
            for m in anim.meshes
        ],
        "skeleton": [_joint_to_dict(j) for j in anim.skeleton],
    }
