from __future__ import annotations
import argparse
import json
import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from libanim.config import DEFAULT_OPTIONS, DecodeOptions, load_config
from libanim.errors import AnimReadError
from libanim.reader import read_anim
from libanim.summary import anim_to_dict, summarize_anim
from libanim.writer import write_anim

console = Console()

def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

def _options(args: argparse.Namespace) -> DecodeOptions:
    if args.config:
        return load_config(args.config)
    return DEFAULT_OPTIONS

def cmd_summary(args: argparse.Namespace) -> int:
    s = summarize_anim(args.anim, _options(args))
    console.print(f"[bold]File:[/bold] {escape(s.path)}")
    console.print(f"[bold]Size:[/bold] {s.file_size} bytes")
    console.print(f"[bold]Version:[/bold] {s.version}")
    console.print(f"[bold]Influences per vertex:[/bold] {s.influences_per_vertex}")
    roots = ", ".join(s.root_names) or "-"
    console.print(f"[bold]Joints:[/bold] {s.joint_count}   [bold]Roots:[/bold] {escape(roots)}   [bold]Max depth:[/bold] {s.max_depth}")

    mt = Table(title="Meshes")
    mt.add_column("#", justify="right")
    mt.add_column("Vertices", justify="right")
    mt.add_column("UVs", justify="right")
    mt.add_column("Normals", justify="right")
    mt.add_column("Materials", justify="right")
    mt.add_column("Triangles", justify="right")
    mt.add_column("Skin weights", justify="right")

    if s.meshes:
        for m in s.meshes:
            mt.add_row(
                str(m.index), str(m.vertex_count), str(m.uv_count), str(m.normal_count),
                str(m.material_count), str(m.triangle_count), str(m.skin_weight_count),
            )
    else:
        mt.add_row("(none)", "-", "-", "-", "-", "-", "-")
    console.print(mt)
    return 0

def cmd_skeleton(args: argparse.Namespace) -> int:
    skel = read_anim(args.anim, _options(args)).skeleton
    tree = Tree(f"[bold]{escape(os.path.basename(args.anim))}[/bold] ({len(skel)} joints)")

    children = skel.child_indices()

    # depth-first, explicit stack (skeletons can be long chains)
    stack = [(r.index, tree) for r in reversed(skel.roots())]
    while stack:
        i, node = stack.pop()
        j = skel[i]
        t = j.translation
        sub = node.add(f"{escape(j.name)} [dim]#{i} t=({t.x:.3f}, {t.y:.3f}, {t.z:.3f})[/dim]")
        for c in reversed(children.get(i, [])):
            stack.append((c, sub))
    console.print(tree)
    return 0

def cmd_dump(args: argparse.Namespace) -> int:
    anim = read_anim(args.anim, _options(args))
    text = json.dumps(anim_to_dict(anim), indent=args.indent)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(text)
        console.print(f"[green]Wrote[/green] {escape(args.out)}")
    else:
        print(text)
    return 0

def cmd_triangulate(args: argparse.Namespace) -> int:
    opts = _options(args)
    anim = read_anim(args.anim, opts)
    write_anim(anim, args.out, opts)
    tris = sum(m.triangle_count for m in anim.meshes)
    console.print(f"[green]Wrote[/green] {escape(args.out)} ({len(anim.meshes)} meshes, {tris} triangles)")
    return 0

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="animcli")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("--config", help="YAML file with decode options")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("summary", help="Print info about an animation file")
    s.add_argument("anim")
    s.set_defaults(fn=cmd_summary)

    k = sub.add_parser("skeleton", help="Print the joint hierarchy")
    k.add_argument("anim")
    k.set_defaults(fn=cmd_skeleton)

    d = sub.add_parser("dump", help="Dump the decoded file as JSON")
    d.add_argument("anim")
    d.add_argument("--out", help="Write JSON here instead of stdout")
    d.add_argument("--indent", type=int, default=None)
    d.set_defaults(fn=cmd_dump)

    t = sub.add_parser("triangulate", help="Rewrite with quads baked into triangles")
    t.add_argument("anim")
    t.add_argument("--out", required=True)
    t.set_defaults(fn=cmd_triangulate)

    return p

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    try:
        return int(args.fn(args))
    except AnimReadError as e:
        console.print(f"[red]Failed to decode {escape(args.anim)}:[/red] {escape(str(e))}")
        return 1
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1

if __name__ == "__main__":
    raise SystemExit(main())
