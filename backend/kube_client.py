"""
Kubernetes client for read-only deployment, pod and metrics queries.
"""
import logging
from typing import List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from converter import quantity_to_bytes, quantity_to_cores, quantity_to_milli
from errors import QueryError, MALFORMED, NOT_FOUND, UNAVAILABLE
from kube_types import ContainerUsage, CustomMetricValue, Deployment, Pod

logger = logging.getLogger(__name__)

METRICS_GROUP = "metrics.k8s.io"
METRICS_VERSION = "v1beta1"
CUSTOM_METRICS_GROUP = "custom.metrics.k8s.io"
CUSTOM_METRICS_VERSION = "v1beta1"


class KubeClient:
    """Kubernetes client for canary monitor queries."""

    def __init__(
        self,
        namespace: str,
        in_cluster: bool = False,
        context: Optional[str] = None,
        config_file: Optional[str] = None,
        request_timeout: Optional[int] = None,
    ):
        """
        Initialize Kubernetes client.

        Args:
            namespace: Target Kubernetes namespace
            in_cluster: Whether running inside cluster (default: False)
            context: Kubernetes context name (optional)
            config_file: Path to kubeconfig file (optional, client default when empty)
            request_timeout: Per-request timeout in seconds (optional)
        """
        self.namespace = namespace
        self.in_cluster = in_cluster
        self.request_timeout = request_timeout

        try:
            self.configuration = client.Configuration()
            if in_cluster:
                config.load_incluster_config(client_configuration=self.configuration)
            else:
                config.load_kube_config(
                    config_file=config_file or None,
                    context=context,
                    client_configuration=self.configuration,
                )
            # Custom metric objects are addressed as "<pod>/<metric>"
            self.configuration.safe_chars_for_path_param = "/"

            self.api_client = client.ApiClient(self.configuration)
            self.v1 = client.CoreV1Api(self.api_client)
            self.apps_v1 = client.AppsV1Api(self.api_client)
            self.custom_objects = client.CustomObjectsApi(self.api_client)
            logger.info(f"✅ Kubernetes client initialized for namespace: {namespace}")

        except Exception as e:
            logger.error(f"❌ Failed to initialize Kubernetes client: {e}")
            raise

    def _call(self, operation: str, func, *args, **kwargs):
        """Run one API call, turning any failure into a QueryError."""
        if self.request_timeout:
            kwargs["_request_timeout"] = self.request_timeout
        try:
            return func(*args, **kwargs)
        except ApiException as e:
            raise QueryError.from_api_exception(operation, e) from e
        except Exception as e:
            raise QueryError(UNAVAILABLE, operation, str(e)) from e

    def list_deployments(self) -> List[Deployment]:
        """
        List deployments in the namespace.

        Returns:
            List of Deployment objects with their pod template labels
        """
        response = self._call(
            "list_deployments",
            self.apps_v1.list_namespaced_deployment,
            namespace=self.namespace,
        )

        deployments = []
        for item in response.items:
            template = item.spec.template if item.spec else None
            template_labels = {}
            if template and template.metadata and template.metadata.labels:
                template_labels = dict(template.metadata.labels)
            deployments.append(Deployment(
                name=item.metadata.name,
                namespace=item.metadata.namespace or self.namespace,
                template_labels=template_labels,
            ))

        logger.debug(f"Retrieved {len(deployments)} deployments from namespace {self.namespace}")
        return deployments

    def get_pods(self, label_selector: Optional[str] = None) -> List[Pod]:
        """
        Get pods in the namespace.

        Args:
            label_selector: Optional label selector for filtering

        Returns:
            List of Pod objects
        """
        response = self._call(
            "get_pods",
            self.v1.list_namespaced_pod,
            namespace=self.namespace,
            label_selector=label_selector or None,
        )

        pods = []
        for item in response.items:
            pods.append(Pod(
                name=item.metadata.name,
                namespace=item.metadata.namespace or self.namespace,
                labels=item.metadata.labels or {},
            ))

        logger.debug(f"Retrieved {len(pods)} pods from namespace {self.namespace} ({label_selector!r})")
        return pods

    def get_pod_usage(self, pod_name: str) -> List[ContainerUsage]:
        """
        Get the current resource usage of a pod from the metrics API.

        Args:
            pod_name: Pod name

        Returns:
            List of ContainerUsage, one per container in the snapshot
        """
        pod_metrics = self._call(
            "get_pod_usage",
            self.custom_objects.get_namespaced_custom_object,
            group=METRICS_GROUP,
            version=METRICS_VERSION,
            namespace=self.namespace,
            plural="pods",
            name=pod_name,
        )

        try:
            return [
                ContainerUsage(
                    name=container["name"],
                    cpu=quantity_to_cores(container.get("usage", {}).get("cpu", "0")),
                    memory_bytes=quantity_to_bytes(container.get("usage", {}).get("memory", "0")),
                )
                for container in pod_metrics.get("containers") or []
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise QueryError(MALFORMED, "get_pod_usage", f"{pod_name}: {e}") from e

    def get_custom_metric(self, pod_name: str, metric_name: str) -> CustomMetricValue:
        """
        Get a custom metric described by a pod.

        Args:
            pod_name: Pod name
            metric_name: Metric name, e.g. nginx_http_requests_per_second

        Returns:
            CustomMetricValue in milli-units
        """
        metric_list = self._call(
            "get_custom_metric",
            self.custom_objects.get_namespaced_custom_object,
            group=CUSTOM_METRICS_GROUP,
            version=CUSTOM_METRICS_VERSION,
            namespace=self.namespace,
            plural="pods",
            name=f"{pod_name}/{metric_name}",
        )

        items = (metric_list or {}).get("items") or []
        if not items:
            raise QueryError(NOT_FOUND, "get_custom_metric", f"no {metric_name} for pod {pod_name}")

        try:
            milli_value = quantity_to_milli(items[0]["value"])
        except (KeyError, TypeError, ValueError) as e:
            raise QueryError(MALFORMED, "get_custom_metric", f"{pod_name}: {e}") from e

        return CustomMetricValue(pod_name=pod_name, metric_name=metric_name, milli_value=milli_value)
