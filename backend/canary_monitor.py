"""
Command-line entry point: watch one deployment and print its pod usage.
"""
import argparse
import logging
import signal
import sys
import threading
from typing import List, Optional

from config import settings
from kube_client import KubeClient
from poll_loop import PollLoop
from report import ReportWriter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report CPU, memory and a custom metric for the pods of one deployment"
    )
    parser.add_argument(
        "--kubeconfig",
        default=settings.KUBECONFIG_PATH,
        help=f"(optional) absolute path to the kubeconfig file (default: {settings.KUBECONFIG_PATH or 'none'})",
    )
    parser.add_argument(
        "--context",
        default=settings.K8S_CONTEXT,
        help="Kubernetes context to use from the kubeconfig file",
    )
    parser.add_argument(
        "--in-cluster",
        action="store_true",
        default=settings.K8S_IN_CLUSTER,
        help="Use the service account of the pod instead of a kubeconfig file",
    )
    parser.add_argument(
        "--namespace",
        default=settings.K8S_NAMESPACE,
        help=f"Namespace of the deployment (default: {settings.K8S_NAMESPACE})",
    )
    parser.add_argument(
        "--deployment",
        default=settings.K8S_DEPLOYMENT,
        help=f"Deployment to watch (default: {settings.K8S_DEPLOYMENT})",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.POLL_INTERVAL_SECS,
        help=f"Seconds between iterations (default: {settings.POLL_INTERVAL_SECS})",
    )
    parser.add_argument(
        "--custom-metric",
        default=settings.CUSTOM_METRIC_NAME,
        help=f"Custom pod metric to report (default: {settings.CUSTOM_METRIC_NAME})",
    )
    parser.add_argument(
        "--no-custom-metric",
        dest="custom_metric_enabled",
        action="store_false",
        default=settings.CUSTOM_METRIC_ENABLED,
        help="Only report CPU and memory",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single iteration and exit",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help=f"Log level: debug|info|warning|error (default: {settings.LOG_LEVEL})",
    )
    return parser


def configure_logging(level: str) -> None:
    # Logs go to stderr, stdout is reserved for the report
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def install_signal_handlers(stop_event: threading.Event) -> None:
    def _stop(signum, _frame):
        logger.info(f"Received signal {signum}, stopping after the current iteration")
        stop_event.set()

    signal.signal(signal.SIGINT, _stop)
    signal.signal(signal.SIGTERM, _stop)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.interval <= 0:
        logger.error(f"❌ Interval must be positive, got {args.interval}")
        return 2

    try:
        kube_client = KubeClient(
            namespace=args.namespace,
            in_cluster=args.in_cluster,
            context=args.context,
            config_file=args.kubeconfig,
            request_timeout=settings.REQUEST_TIMEOUT_SECS,
        )
    except Exception as e:
        logger.error(f"❌ Cannot build Kubernetes client: {e}")
        return 1

    loop = PollLoop(
        kube_client,
        deployment_name=args.deployment,
        writer=ReportWriter(sys.stdout),
        interval=args.interval,
        custom_metric=args.custom_metric if args.custom_metric_enabled else None,
    )

    stop_event = threading.Event()
    install_signal_handlers(stop_event)
    loop.run(stop_event, max_iterations=1 if args.once else None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
