"""Interface definitions for kubecloud provider adapters."""

from kubecloud.interfaces.client_provider import ClientFactory, KubernetesClientProvider

__all__ = [
    "ClientFactory",
    "KubernetesClientProvider",
]
