"""
Configuration settings for canary monitor.
"""
import os
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


def default_kubeconfig_path() -> str:
    """Return ~/.kube/config for the current user, or "" when no home is known."""
    home = os.getenv("HOME") or os.getenv("USERPROFILE")  # USERPROFILE on windows
    if home:
        return os.path.join(home, ".kube", "config")
    return ""


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    APP_NAME: str = Field(default="canary-monitor", description="Application name")

    # Kubernetes Configuration
    K8S_NAMESPACE: str = Field(default="applications", description="Kubernetes namespace")
    K8S_DEPLOYMENT: str = Field(default="resume", description="Deployment to watch")
    K8S_CONTEXT: Optional[str] = Field(default=None, description="Kubernetes context")
    K8S_IN_CLUSTER: bool = Field(default=False, description="Running in cluster")
    KUBECONFIG_PATH: str = Field(default_factory=default_kubeconfig_path, description="Path to kubeconfig file")

    # Polling Configuration
    POLL_INTERVAL_SECS: float = Field(default=2.0, description="Delay between iterations")
    CUSTOM_METRIC_ENABLED: bool = Field(default=True, description="Report the custom pod metric")
    CUSTOM_METRIC_NAME: str = Field(default="nginx_http_requests_per_second", description="Custom metric name")

    # Service Configuration
    REQUEST_TIMEOUT_SECS: int = Field(default=30, description="Request timeout")
    LOG_LEVEL: str = Field(default="info", description="Log level: info|debug|warning")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance
settings = Settings()
