"""Kubernetes dynamic client factory."""

from kubernetes import config, dynamic

from kubecloud.core.exceptions import DelegationError
from kubecloud.core.models import ConnectionConfig
from kubecloud.utils.logging import get_logger, log_error

logger = get_logger(__name__)


def new_dynamic_client(
    connection: ConnectionConfig, cluster_name: str | None = None
) -> dynamic.DynamicClient:
    """Create a dynamic Kubernetes client from a connection config.

    Auth-provider references (e.g. ``gcp``) are resolved by the kubernetes
    library while the client is built.

    Args:
        connection: Host, CA data and credential for the API server
        cluster_name: Cluster name for log and error context (optional)

    Returns:
        DynamicClient bound to the cluster

    Raises:
        DelegationError: If the client cannot be constructed
    """
    try:
        logger.debug("creating_dynamic_client", host=connection.host, cluster_name=cluster_name)

        api_client = config.new_client_from_config_dict(
            connection.to_kubeconfig_dict(),
            persist_config=False,
        )
        client = dynamic.DynamicClient(api_client)

        logger.info("dynamic_client_created", host=connection.host, cluster_name=cluster_name)
        return client

    except Exception as e:
        log_error(logger, e, operation="new_dynamic_client", host=connection.host)
        raise DelegationError(
            f"error creating kubernetes client for cluster [{cluster_name}] "
            f"at [{connection.host}]: {e}",
            cluster_name=cluster_name,
            operation="new_dynamic_client",
        ) from e
