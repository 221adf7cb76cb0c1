"""Version extraction from pods and the version ordering used for every cell."""

import re
from typing import Dict, Optional, Tuple

from .schema import ContainerInstance

_SEGMENT_SPLIT = re.compile(r"[.\-]")

VERSION_LABEL = "version"


def extract_version(
    container: ContainerInstance,
    labels: Dict[str, str],
    use_label_version: bool = False,
) -> Optional[str]:
    """Return the display version of a container instance.

    In label mode the pod's ``version`` label is used and ``None`` means the
    label is absent. Otherwise the tag of the image reference is used:
    ``repo:v1.2@sha256:..`` gives ``1.2``. A reference without a ``:`` is
    returned whole.
    """
    if use_label_version:
        return labels.get(VERSION_LABEL)

    image = container.image
    colon = image.find(":")
    if colon < 0:
        return image
    tag = image[colon + 1:]
    at = tag.find("@")
    if at >= 0:
        tag = tag[:at]
    if tag.startswith("v"):
        tag = tag[1:]
    return tag


def _segment_key(segment: str) -> Tuple[int, int, str]:
    # Numeric segments sort before textual ones.
    if segment.isdecimal():
        return (0, int(segment), "")
    return (1, 0, segment.lower())


def version_key(version: str) -> Tuple[tuple, str]:
    """Sort key: per-segment keys, then the raw string as a final tie-break."""
    segments = tuple(_segment_key(s) for s in _SEGMENT_SPLIT.split(version))
    return (segments, version)


def compare_versions(a: str, b: str) -> int:
    """Three-way comparison: negative, zero or positive."""
    ka, kb = version_key(a), version_key(b)
    return (ka > kb) - (ka < kb)
