"""
CLI entry point. Parses args, gathers pods and delegates to the pipeline.
"""

import sys
from datetime import datetime, timezone
from typing import List, Optional

from rich.console import Console

from .cli import parse_args
from .filters import apply_filters
from .pipeline import load_snapshot, run_pipeline, save_snapshot, summarize
from .schema import DiffOptions, EnvironmentSpec, PodRecord


def _gather_pods(args) -> List[PodRecord]:
    """Load pods from a snapshot or fetch them from every cluster."""
    if args.from_snapshot is not None:
        return load_snapshot(args.from_snapshot).pods

    from .fetch import fetch_all_pods

    pods = fetch_all_pods(
        kubeconfig=args.kubeconfig,
        exclude_clusters=args.exclude_clusters,
        timeout=args.timeout,
    )
    if args.save_snapshot is not None:
        save_snapshot(pods, args.save_snapshot, meta={
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "kubeconfig": args.kubeconfig or "",
            "excluded_clusters": args.exclude_clusters,
        })
    return pods


def main(argv: Optional[list] = None, console: Optional[Console] = None) -> int:
    args = parse_args(argv)
    console = console or Console()

    try:
        pods = apply_filters(
            _gather_pods(args),
            exclude_namespace=args.exclude_namespaces,
            exclude_container=args.exclude_containers,
        )
        if not pods:
            print("No pods found!", file=sys.stderr)
            return 1

        spec = EnvironmentSpec.parse(args.environments, include_other=args.other)
        options = DiffOptions(
            expand_versions=args.expand,
            show_only_different=args.only_different,
            treat_missing_as_equal=args.missing_equal,
            show_namespaces=args.namespaces,
            use_label_version=args.label_version,
            target_width=args.width if args.width is not None else console.width,
        )
        result = run_pipeline(
            pods,
            spec,
            options,
            html=args.html is not None,
            meta={
                "environments": ", ".join(spec.tokens),
                "generated": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
            },
        )
        for message in summarize(result):
            print(message, file=sys.stderr)

        if args.html is not None:
            args.html.parent.mkdir(parents=True, exist_ok=True)
            args.html.write_text(result.html or "")
            print(f"Wrote {args.html}", file=sys.stderr)
            return 0

        for line in result.lines:
            console.print(line.text, style=line.style, markup=False,
                          highlight=False, soft_wrap=True)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
