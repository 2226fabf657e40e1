"""Cloud provider adapters producing Kubernetes clients."""

from kubecloud.adapters.eks_adapter import EKSConfig, new_eks_config
from kubecloud.adapters.gke_adapter import GKEConfig, new_gke_config

ProviderSession = EKSConfig | GKEConfig

__all__ = [
    "EKSConfig",
    "GKEConfig",
    "ProviderSession",
    "new_eks_config",
    "new_gke_config",
]
