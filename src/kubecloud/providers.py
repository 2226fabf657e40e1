"""Select a provider adapter for a declarative cluster target."""

from kubecloud.adapters import ProviderSession, new_eks_config, new_gke_config
from kubecloud.core.config import EKSTarget, GKETarget
from kubecloud.interfaces.client_provider import ClientFactory


def new_session(
    target: EKSTarget | GKETarget, client_factory: ClientFactory | None = None
) -> ProviderSession:
    """Construct the adapter matching a target's provider.

    Args:
        target: EKS or GKE cluster target
        client_factory: Callable building a client from a ConnectionConfig (optional)

    Returns:
        EKSConfig or GKEConfig

    Raises:
        ConfigurationError: If the provider prerequisites are missing
    """
    if isinstance(target, EKSTarget):
        return new_eks_config(
            target.cluster_name, timeout=target.timeout, client_factory=client_factory
        )
    return new_gke_config(
        target.cluster_name,
        target.project,
        target.zone,
        timeout=target.timeout,
        client_factory=client_factory,
    )
