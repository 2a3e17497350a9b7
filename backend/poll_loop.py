"""
Polling loop reporting resource usage for the pods of one deployment.
"""
import logging
import threading
from typing import Callable, List, Optional, TypeVar

from errors import QueryError
from kube_types import ContainerUsage, Deployment, Pod
from label_selector import build_label_selector
from report import ReportWriter

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_INTERVAL_SECS = 2.0


class PollLoop:
    """
    Find the pods of a deployment on every tick and report their usage.

    Every query is best effort: a failure is logged and its result is
    treated as empty (or zero for the custom metric). Nothing is kept
    between iterations.
    """

    def __init__(
        self,
        kube_client,
        deployment_name: str,
        writer: Optional[ReportWriter] = None,
        interval: float = DEFAULT_INTERVAL_SECS,
        custom_metric: Optional[str] = None,
    ):
        """
        Args:
            kube_client: Provider of list_deployments, get_pods, get_pod_usage
                and get_custom_metric, bound to a namespace
            deployment_name: Name of the deployment to watch
            writer: Report destination (stdout by default)
            interval: Seconds to wait between iterations
            custom_metric: Custom pod metric to report, None to skip it
        """
        self.kube_client = kube_client
        self.deployment_name = deployment_name
        self.writer = writer or ReportWriter()
        self.interval = interval
        self.custom_metric = custom_metric

    def _query(self, operation: str, default: T, func: Callable[..., T], *args) -> T:
        try:
            return func(*args)
        except QueryError as e:
            logger.warning(f"⚠️ {e.operation} {e.kind}: {e.message}")
        except Exception as e:
            logger.warning(f"⚠️ {operation} failed: {e}", exc_info=True)
        return default

    def run_once(self) -> None:
        """Run a single iteration: deployments, pods, usage, separator."""
        deployments: List[Deployment] = self._query(
            "list_deployments", [], self.kube_client.list_deployments
        )

        for deployment in deployments:
            if deployment.name != self.deployment_name:
                continue

            label_selector = build_label_selector(deployment.template_labels)
            pods: List[Pod] = self._query(
                "get_pods", [], self.kube_client.get_pods, label_selector
            )

            for pod in pods:
                self._report_pod(pod)

        self.writer.separator()

    def _report_pod(self, pod: Pod) -> None:
        self.writer.pod(pod.name)

        containers: List[ContainerUsage] = self._query(
            "get_pod_usage", [], self.kube_client.get_pod_usage, pod.name
        )
        for container in containers:
            self.writer.container(container)

        if self.custom_metric:
            value = self._query(
                "get_custom_metric", None, self.kube_client.get_custom_metric, pod.name, self.custom_metric
            )
            self.writer.custom_metric(self.custom_metric, value.milli_value if value else 0)

    def run(self, stop_event: Optional[threading.Event] = None, max_iterations: Optional[int] = None) -> int:
        """
        Repeat run_once until stop_event is set.

        Args:
            stop_event: Cancellation token, checked between iterations and
                interrupting the wait
            max_iterations: Stop after this many iterations (optional)

        Returns:
            Number of iterations run
        """
        stop_event = stop_event or threading.Event()
        iterations = 0

        logger.info(f"🔁 Watching deployment {self.deployment_name} every {self.interval}s")
        while not stop_event.is_set():
            self.run_once()
            iterations += 1
            if max_iterations is not None and iterations >= max_iterations:
                break
            stop_event.wait(self.interval)

        logger.info(f"Stopped after {iterations} iterations")
        return iterations
