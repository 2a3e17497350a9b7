"""
Label selector helpers.
"""
from typing import Mapping, Optional


def build_label_selector(labels: Optional[Mapping[str, str]]) -> str:
    """
    Build an equality-based label selector from a label set.

    Keys are sorted so the selector is the same on every run.

    Args:
        labels: Pod template labels of a deployment

    Returns:
        Comma-joined key=value pairs, "" for an empty label set
    """
    if not labels:
        return ""
    return ",".join(f"{key}={labels[key]}" for key in sorted(labels))

