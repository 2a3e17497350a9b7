r"""
Console report for the poll loop.

The layout is consumed by log scrapers and must not change:

    Pod name: <name>
    \tContainer name: <name>
    \t\tCPU: <int>
    \t\tMemory: <int>
    \tCustom prometheus metric:
    \t\t<metric>: <int>m
    ---
    <blank line>
"""
import sys
from typing import Optional, TextIO

from kube_types import ContainerUsage

SEPARATOR = "---\n\n"


class ReportWriter:
    """Writes pod usage lines to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def pod(self, pod_name: str) -> None:
        self.stream.write(f"Pod name: {pod_name}\n")

    def container(self, usage: ContainerUsage) -> None:
        self.stream.write(f"\tContainer name: {usage.name}\n")
        self.stream.write(f"\t\tCPU: {usage.cpu_display}\n\t\tMemory: {usage.memory_mebibytes}\n")

    def custom_metric(self, metric_name: str, milli_value: int) -> None:
        self.stream.write("\tCustom prometheus metric:\n")
        self.stream.write(f"\t\t{metric_name}: {milli_value}m\n")

    def separator(self) -> None:
        self.stream.write(SEPARATOR)
        self.stream.flush()
