"""Shared fixtures for canary monitor tests."""

import io
from decimal import Decimal
from typing import Dict, List, Optional

import pytest

from errors import QueryError
from kube_types import ContainerUsage, CustomMetricValue, Deployment, Pod
from report import ReportWriter


def parse_label_selector(selector: str) -> Dict[str, str]:
    """Parse an equality-based selector such as "a=1,b=2" into a mapping."""
    requirements = {}
    for part in selector.split(","):
        if not part:
            continue
        key, _, value = part.partition("=")
        requirements[key.strip()] = value.strip()
    return requirements


def matches(selector: str, labels: Optional[Dict[str, str]]) -> bool:
    """Whether a label set carries every key=value pair of the selector, as the API server filters."""
    labels = labels or {}
    return all(labels.get(key) == value for key, value in parse_label_selector(selector).items())


class FakeKubeClient:
    """In-memory stand-in for KubeClient.

    Each capability returns the configured data, or raises the configured
    exception when one is set under the capability's name in ``failures``.
    """

    def __init__(
        self,
        namespace: str = "applications",
        deployments: Optional[List[Deployment]] = None,
        pods: Optional[List[Pod]] = None,
        usage: Optional[Dict[str, List[ContainerUsage]]] = None,
        metrics: Optional[Dict[str, int]] = None,
    ):
        self.namespace = namespace
        self.deployments = deployments or []
        self.pods = pods or []
        self.usage = usage or {}
        self.metrics = metrics or {}
        self.failures: Dict[str, Exception] = {}
        self.calls: List[tuple] = []

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.failures:
            raise self.failures[operation]

    def list_deployments(self) -> List[Deployment]:
        self.calls.append(("list_deployments",))
        self._maybe_fail("list_deployments")
        return list(self.deployments)

    def get_pods(self, label_selector: Optional[str] = None) -> List[Pod]:
        self.calls.append(("get_pods", label_selector))
        self._maybe_fail("get_pods")
        return [pod for pod in self.pods if matches(label_selector or "", pod.labels)]

    def get_pod_usage(self, pod_name: str) -> List[ContainerUsage]:
        self.calls.append(("get_pod_usage", pod_name))
        self._maybe_fail("get_pod_usage")
        return list(self.usage.get(pod_name, []))

    def get_custom_metric(self, pod_name: str, metric_name: str) -> CustomMetricValue:
        self.calls.append(("get_custom_metric", pod_name, metric_name))
        self._maybe_fail("get_custom_metric")
        if pod_name not in self.metrics:
            raise QueryError("not_found", "get_custom_metric", f"no {metric_name} for pod {pod_name}")
        return CustomMetricValue(pod_name=pod_name, metric_name=metric_name, milli_value=self.metrics[pod_name])


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def writer(stream):
    return ReportWriter(stream)


@pytest.fixture
def resume_client():
    """One 'resume' deployment with one matching pod using 1 core and 128Mi."""
    return FakeKubeClient(
        deployments=[Deployment(name="resume", namespace="applications", template_labels={"app": "resume"})],
        pods=[Pod(name="resume-abc", namespace="applications", labels={"app": "resume"})],
        usage={"resume-abc": [ContainerUsage(name="resume", cpu=Decimal("1"), memory_bytes=134217728)]},
        metrics={"resume-abc": 2500},
    )
