"""kubecloud.

Authenticated Kubernetes clients for EKS and GKE clusters from cluster
identifiers and ambient cloud credentials.
"""

from kubecloud.adapters import (
    EKSConfig,
    GKEConfig,
    ProviderSession,
    new_eks_config,
    new_gke_config,
)
from kubecloud.providers import new_session

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    "EKSConfig",
    "GKEConfig",
    "ProviderSession",
    "new_eks_config",
    "new_gke_config",
    "new_session",
]
