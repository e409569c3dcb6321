import pytest

from wire import anim_file, face_set, joint, mesh


@pytest.fixture
def sample_bytes():
    """Two meshes and a four joint skeleton whose parents point both ways."""
    m0 = mesh(
        vertices=(0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 1.0, 0.0),
        uvs=(0, 0, 4096, 0, 4096, 4096, 0, 4096),
        normals=(0.0, 0.0, 1.0) * 4,
        face_sets=(
            face_set(0, quads=(0, 1, 2, 3)),
            face_set(7, triangles=(0, 1, 2)),
        ),
        skin_weights=(1.0, 0.5, 0.25, 0.0),
        skin_indices=(0, 1, 2, -1),
    )
    m1 = mesh(vertices=(2.0, 2.0, 2.0), normals=(0.0, 1.0, 0.0))
    joints = (
        joint(2, "spine", translation=(0.0, 1.0, 0.0)),
        joint(0, "head", translation=(0.0, 0.5, 0.0)),
        joint(-1, "root", rotation=(0.0, 0.0, 0.0, 1.0)),
        joint(2, "leg", translation=(0.25, -1.0, 0.0)),
    )
    return anim_file(version=3, meshes=(m0, m1), influences=2, joints=joints)


@pytest.fixture
def sample_path(tmp_path, sample_bytes):
    p = tmp_path / "model.anim"
    p.write_bytes(sample_bytes)
    return p
