import io
import logging

import pytest

from libanim import read_anim, read_anim_bytes, read_anim_stream
from libanim.errors import AnimReadError, InvalidTopology, MalformedCount, UnexpectedEof

from wire import Trickle, anim_file, face_set, i32, joint, mesh


def test_sample_file(sample_bytes):
    anim = read_anim_bytes(sample_bytes)
    assert anim.version == 3
    assert anim.influences_per_vertex == 2
    assert len(anim.meshes) == 2

    m0, m1 = anim.meshes
    assert m0.vertex_count == 4
    assert m0.uvs == (0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0, 1.0)
    assert m0.elements == {0: (0, 1, 3, 1, 2, 3), 7: (0, 1, 2)}
    assert m0.skin_indices == (0, 1, 2, -1)
    assert m1.vertices == (2.0, 2.0, 2.0)
    assert m1.elements == {}

    skel = anim.skeleton
    assert [j.name for j in skel] == ["spine", "head", "root", "leg"]
    assert skel.parent_of(skel.find("head")) is skel.find("spine")
    assert skel.parent_of(skel.find("spine")) is skel.parent_of(skel.find("leg"))
    assert skel.find("leg").translation.y == -1.0


def test_stream_and_bytes_agree(sample_bytes):
    assert read_anim_stream(Trickle(sample_bytes)) == read_anim_bytes(sample_bytes)


def test_read_from_path(sample_path, sample_bytes):
    assert read_anim(str(sample_path)) == read_anim_bytes(sample_bytes)


def test_trailing_bytes_ignored(sample_bytes, caplog):
    with caplog.at_level(logging.DEBUG, logger="libanim.reader"):
        anim = read_anim_bytes(sample_bytes + b"garbage")
    assert anim == read_anim_bytes(sample_bytes)
    assert "ignoring 7 trailing bytes" in caplog.text


def test_empty_file_fails_at_version():
    with pytest.raises(UnexpectedEof) as ei:
        read_anim_bytes(b"")
    assert str(ei.value).startswith("version: ")


def test_negative_mesh_count():
    with pytest.raises(MalformedCount) as ei:
        read_anim_bytes(i32(1) + i32(-3))
    assert ei.value.stages == ["mesh count"]


def test_truncated_mid_array_names_stage():
    data = anim_file(meshes=(mesh(vertices=(1.0, 2.0, 3.0)),))
    # version, mesh count, vertex count, one float
    with pytest.raises(UnexpectedEof) as ei:
        read_anim_bytes(data[:16])
    assert ei.value.stages == ["mesh 0", "vertices"]
    assert str(ei.value).startswith("mesh 0 > vertices: Unexpected EOF")


def test_bad_topology_in_second_mesh():
    bad = mesh(face_sets=(face_set(0, triangles=(0, 1, 2)), face_set(1, quads=(0, 1, 2))))
    data = anim_file(meshes=(mesh(), bad))
    with pytest.raises(InvalidTopology) as ei:
        read_anim_bytes(data)
    assert str(ei.value).startswith("mesh 1 > face set 1 > quads: quad index count 3")


def test_skeleton_error_stage():
    data = anim_file(joints=(joint(-1, "root"), joint(9, "lost")))
    with pytest.raises(AnimReadError) as ei:
        read_anim_bytes(data)
    assert ei.value.stages == ["skeleton"]
    assert "parent index 9" in str(ei.value)


def test_truncated_skeleton():
    data = anim_file(joints=(joint(-1, "root"), joint(0, "child")))
    with pytest.raises(UnexpectedEof) as ei:
        read_anim_bytes(data[:-1])
    assert ei.value.stages == ["skeleton", "joint 1"]


def test_io_errors_propagate():
    class Broken:
        def read(self, n):
            raise OSError("disk gone")

    with pytest.raises(OSError):
        read_anim_stream(Broken())


def test_result_is_immutable(sample_bytes):
    anim = read_anim_bytes(sample_bytes)
    with pytest.raises(AttributeError):
        anim.version = 4


def test_mesh_elements_are_read_only(sample_bytes):
    m = read_anim_bytes(sample_bytes).meshes[0]
    with pytest.raises(TypeError):
        m.elements[0] = (9, 9, 9)
    with pytest.raises(TypeError):
        del m.elements[7]
    assert m.elements == {0: (0, 1, 3, 1, 2, 3), 7: (0, 1, 2)}
