"""Client provider interface implemented by each cloud adapter."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from kubecloud.core.models import ConnectionConfig

ClientFactory = Callable[[ConnectionConfig], Any]


class KubernetesClientProvider(ABC):
    """Abstract capability: produce a Kubernetes client for one cluster.

    Implementations hold their own provider session and share no
    implementation. Every call performs fresh discovery and credential
    derivation; nothing is cached between calls.
    """

    cluster_name: str

    @abstractmethod
    def connection_config(self) -> ConnectionConfig:
        """Discover the cluster and assemble its connection config.

        Returns:
            ConnectionConfig with host, CA data and one credential

        Raises:
            KubeCloudError: If discovery or credential derivation fails
        """

    @abstractmethod
    def new_for_kubernetes(self) -> Any:
        """Return a dynamic Kubernetes client for the cluster.

        Returns:
            Client produced by the configured client factory

        Raises:
            KubeCloudError: If any step fails
        """
