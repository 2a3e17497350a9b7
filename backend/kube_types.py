"""
Type definitions for Kubernetes objects read by the poll loop.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict

from converter import cpu_to_display, bytes_to_mebibytes


@dataclass
class Deployment:
    """Kubernetes Deployment representation."""
    name: str
    namespace: str
    template_labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Pod:
    """Kubernetes Pod representation."""
    name: str
    namespace: str
    labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class ContainerUsage:
    """Current CPU and memory usage of one container."""
    name: str
    cpu: Decimal  # cores
    memory_bytes: int

    @property
    def cpu_display(self) -> int:
        return cpu_to_display(self.cpu)

    @property
    def memory_mebibytes(self) -> int:
        return bytes_to_mebibytes(self.memory_bytes)


@dataclass
class CustomMetricValue:
    """A custom metric value described by one pod."""
    pod_name: str
    metric_name: str
    milli_value: int
