import json

from animcli.main import main
from libanim import read_anim

from wire import anim_file, face_set, mesh


def _flat(text):
    return " ".join(text.split())


def test_summary(sample_path, capsys):
    assert main(["summary", str(sample_path)]) == 0
    out = _flat(capsys.readouterr().out)
    assert "Version: 3" in out
    assert "Influences per vertex: 2" in out
    assert "Joints: 4" in out
    assert "Roots: root" in out


def test_skeleton_tree(sample_path, capsys):
    assert main(["skeleton", str(sample_path)]) == 0
    out = capsys.readouterr().out
    lines = [l for l in out.splitlines() if l.strip()]
    names = [n for l in lines for n in ("root", "spine", "head", "leg") if f"{n} #" in l]
    assert names == ["root", "spine", "head", "leg"]


def test_dump_stdout(sample_path, capsys):
    assert main(["dump", str(sample_path)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["version"] == 3
    assert data["meshes"][0]["elements"]["0"] == [0, 1, 3, 1, 2, 3]
    assert [j["parent"] for j in data["skeleton"]] == [2, 0, None, 2]


def test_dump_with_config(tmp_path, sample_path, capsys):
    cfg = tmp_path / "decode.yaml"
    cfg.write_text("uv_scale: 2048\n", encoding="utf-8")
    out = tmp_path / "dump.json"
    assert main(["--config", str(cfg), "dump", str(sample_path), "--out", str(out)]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["meshes"][0]["uvs"][2] == 2.0


def test_triangulate(tmp_path, capsys):
    src = tmp_path / "quads.anim"
    src.write_bytes(anim_file(meshes=(mesh(face_sets=(face_set(0, quads=(0, 1, 2, 3)),)),)))
    dst = tmp_path / "tris.anim"
    assert main(["triangulate", str(src), "--out", str(dst)]) == 0
    assert read_anim(str(dst)) == read_anim(str(src))
    assert "2 triangles" in _flat(capsys.readouterr().out)


def test_decode_failure_exit_code(tmp_path, capsys):
    bad = tmp_path / "bad.anim"
    bad.write_bytes(anim_file(meshes=(mesh(face_sets=(face_set(0, quads=(0, 1)),)),)))
    assert main(["summary", str(bad)]) == 1
    out = _flat(capsys.readouterr().out)
    assert "Failed to decode" in out
    assert "quad index count 2" in out


def test_missing_file(tmp_path, capsys):
    assert main(["summary", str(tmp_path / "missing.anim")]) == 1
    assert "Error:" in capsys.readouterr().out


def test_broken_config(tmp_path, sample_path, capsys):
    cfg = tmp_path / "decode.yaml"
    cfg.write_text("uv_scale: [1\n", encoding="utf-8")
    assert main(["--config", str(cfg), "summary", str(sample_path)]) == 1
    assert "not valid YAML" in _flat(capsys.readouterr().out)


def test_fractional_chunk_size_rejected(tmp_path, sample_path, capsys):
    cfg = tmp_path / "decode.yaml"
    cfg.write_text("read_chunk_size: 0.5\n", encoding="utf-8")
    assert main(["--config", str(cfg), "summary", str(sample_path)]) == 1
    assert "'read_chunk_size' must be an integer" in _flat(capsys.readouterr().out)
