#!/usr/bin/env python
import argparse, sys
from typing import Dict, Optional, Sequence, Tuple

from .bootstrap import build_container
from .core.config import load_config
from .core.logging import setup_logging


def render_dot(graph: Dict[str, Tuple[str, ...]]) -> str:
    lines = ["digraph G {", '  rankdir=LR; node [shape=box, fontsize=10];']
    for token in sorted(graph):
        lines.append(f'  "{token}";')
        for dep in graph[token]:
            lines.append(f'  "{token}" -> "{dep}";')
    lines.append("}")
    return "\n".join(lines)


def cmd_serve(args) -> int:
    import uvicorn
    from .api.app import create_app

    cfg = load_config(args.config)
    host = args.host or cfg.host
    port = args.port or cfg.port
    setup_logging(cfg.log_level)
    app = create_app(build_container(cfg))
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


def cmd_init_db(args) -> int:
    from .data.repository import SQLBookRepository

    cfg = load_config(args.config)
    setup_logging(cfg.log_level)
    dsn = args.dsn or cfg.dsn
    print(f"[init-db] dsn={dsn}")
    repo = SQLBookRepository(dsn, seed=not args.no_seed)
    repo.close()
    print("[init-db] done")
    return 0


def cmd_graph(args) -> int:
    cfg = load_config(args.config)
    print(render_dot(build_container(cfg).dependency_graph()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bookstore")
    p.add_argument("--config", default=None, help="YAML config file (BOOKSTORE_* env vars override it)")
    sub = p.add_subparsers(dest="command")

    s = sub.add_parser("serve", help="run the HTTP API")
    s.add_argument("--host", default=None)
    s.add_argument("--port", type=int, default=None)
    s.set_defaults(func=cmd_serve)

    i = sub.add_parser("init-db", help="create (and seed) the books table")
    i.add_argument("--dsn", default=None)
    i.add_argument("--no-seed", action="store_true")
    i.set_defaults(func=cmd_init_db)

    g = sub.add_parser("graph", help="print the container dependency graph as Graphviz DOT")
    g.set_defaults(func=cmd_graph)
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    if not getattr(args, "func", None):
        p.print_help()
        return 2
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
