"""
CLI argument parsing.
"""

import argparse
from pathlib import Path
from typing import Optional

from ._util import split_csv
from .fetch import DEFAULT_TIMEOUT


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="containerdiff",
        description="Show container versions for multiple environments in a table. "
                    "Clusters are grouped into environments using a substring of the "
                    "cluster (kubeconfig context) name.",
    )
    parser.add_argument(
        "environments",
        metavar="ENV1,ENV2,...",
        help="Comma-separated environment tokens, in column order",
    )

    # Diff modes
    parser.add_argument(
        "-d",
        "--only-different",
        action="store_true",
        help="Show only containers having different versions",
    )
    parser.add_argument(
        "-m",
        "--missing-equal",
        action="store_true",
        help="Treat missing environments as equal when comparing versions",
    )
    parser.add_argument(
        "-o",
        "--other",
        action="store_true",
        help='Group clusters matching no environment in an "other" environment',
    )
    parser.add_argument(
        "-n",
        "--namespaces",
        action="store_true",
        help="Annotate container names with the namespaces they run in",
    )
    parser.add_argument(
        "-l",
        "--label-version",
        action="store_true",
        help="Take versions from the pod 'version' label instead of the image tag",
    )

    # Output
    parser.add_argument(
        "--html",
        type=Path,
        metavar="PATH",
        help="Write an HTML document to PATH instead of printing a table",
    )
    parser.add_argument(
        "-e",
        "--expand",
        action="store_true",
        help="HTML: list every version of a cell instead of collapsing long cells",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        metavar="N",
        help="Table width for console output (default: terminal width)",
    )

    # Exclusions
    parser.add_argument(
        "-x",
        "--exclude-containers",
        type=split_csv,
        default=[],
        metavar="LIST",
        help="Exclude containers, using substrings of the container name",
    )
    parser.add_argument(
        "--exclude-clusters",
        type=split_csv,
        default=[],
        metavar="LIST",
        help="Exclude clusters, using substrings of the cluster name",
    )
    parser.add_argument(
        "--exclude-namespaces",
        type=split_csv,
        default=[],
        metavar="LIST",
        help="Exclude namespaces, using substrings of the namespace name",
    )

    # Cluster access
    parser.add_argument(
        "--kubeconfig",
        type=str,
        metavar="PATH",
        help="Kubeconfig file (default: KUBECONFIG or ~/.kube/config)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help=f"Request timeout and overall fetch deadline in seconds (default: {DEFAULT_TIMEOUT})",
    )

    # Snapshot load/save
    parser.add_argument(
        "--from-snapshot",
        type=Path,
        metavar="PATH",
        help="Skip the clusters; load pods from a snapshot written by --save-snapshot",
    )
    parser.add_argument(
        "--save-snapshot",
        type=Path,
        metavar="PATH",
        help="Save the fetched pods to PATH as JSON",
    )

    return parser.parse_args(argv)
