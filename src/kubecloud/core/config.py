"""Configuration management for kubecloud."""

from pathlib import Path
from typing import Annotated, Any, Literal

import yaml
from pydantic import BaseModel, Field

from kubecloud.core.exceptions import ConfigurationError


class EKSTarget(BaseModel):
    """EKS cluster target."""

    provider: Literal["eks"] = "eks"
    cluster_name: str = Field(..., description="EKS cluster name")
    timeout: float | None = Field(None, description="EKS API timeout in seconds")


class GKETarget(BaseModel):
    """GKE cluster target."""

    provider: Literal["gke"] = "gke"
    cluster_name: str = Field(..., description="GKE cluster name")
    project: str = Field(..., description="GCP project ID")
    zone: str = Field(..., description="Zone the cluster runs in")
    timeout: float | None = Field(None, description="GKE API timeout in seconds")


ClusterTarget = Annotated[EKSTarget | GKETarget, Field(discriminator="provider")]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"
    output: str = "stdout"


class KubeCloudConfig(BaseModel):
    """Main kubecloud configuration."""

    targets: list[ClusterTarget] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: str | Path) -> "KubeCloudConfig":
        """Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            KubeCloudConfig instance

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        config_path = Path(path).expanduser()

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f)
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

        try:
            return cls(**(data or {}))
        except Exception as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def get_target(self, cluster_name: str) -> EKSTarget | GKETarget | None:
        """Get target by cluster name.

        Args:
            cluster_name: Name of the cluster

        Returns:
            Target if found, None otherwise
        """
        return next((t for t in self.targets if t.cluster_name == cluster_name), None)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation
        """
        return self.model_dump()
