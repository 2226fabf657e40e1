"""GKE adapter implementing the KubernetesClientProvider interface."""

import functools
from typing import Any

from kubecloud.clients.gke_client import CLOUD_PLATFORM_SCOPE, GKEClient
from kubecloud.clients.kubernetes_client import new_dynamic_client
from kubecloud.core.exceptions import (
    ClusterLookupError,
    ClusterNotFoundError,
    DelegationError,
    KubeCloudError,
)
from kubecloud.core.models import (
    AuthProviderConfig,
    ConnectionConfig,
    Kubeconfig,
    KubeconfigAuthInfo,
    KubeconfigCluster,
    KubeconfigContext,
)
from kubecloud.interfaces.client_provider import ClientFactory, KubernetesClientProvider
from kubecloud.utils.certificates import decode_ca_certificate
from kubecloud.utils.logging import get_logger

logger = get_logger(__name__)

GKE_AUTH_PROVIDER = "gcp"
GKE_AUTH_SCOPE = CLOUD_PLATFORM_SCOPE


class GKEConfig(KubernetesClientProvider):
    """Configuration needed to create a Kubernetes client for a GKE cluster.

    GKE has no signable identity header, so instead of a static token the
    produced config references the ``gcp`` auth-provider; the kubernetes
    library mints an OAuth token from application default credentials when
    the client is built.
    """

    def __init__(
        self,
        cluster_name: str,
        project: str,
        zone: str,
        service: Any | None = None,
        timeout: float | None = None,
        client_factory: ClientFactory | None = None,
    ):
        """Initialize GKE config.

        Args:
            cluster_name: Name of the GKE cluster
            project: GCP project ID
            zone: Zone the cluster was requested in
            service: Existing container v1 discovery resource (optional)
            timeout: Timeout in seconds for GKE API calls (optional)
            client_factory: Callable building a client from a ConnectionConfig
                (defaults to a kubernetes DynamicClient)

        Raises:
            ConfigurationError: If the container service cannot be built
        """
        self.cluster_name = cluster_name
        self.project = project
        self.zone = zone

        try:
            self.client = GKEClient(service=service, timeout=timeout)
        except KubeCloudError as e:
            e.cluster_name = cluster_name
            logger.error(
                "gke_config_failed", cluster_name=cluster_name, project=project, error=str(e)
            )
            raise

        self.client_factory = client_factory or functools.partial(
            new_dynamic_client, cluster_name=cluster_name
        )
        logger.debug(
            "gke_config_initialized", cluster_name=cluster_name, project=project, zone=zone
        )

    def build_kubeconfig(self) -> Kubeconfig:
        """Find the cluster and build a named kubeconfig for it.

        Every cluster in the project is listed and scanned for an exact
        name match; the first match wins.

        Returns:
            Kubeconfig whose cluster, context and auth-info entries are all
            named after the cluster

        Raises:
            ClusterLookupError: If the list call fails or the matching cluster has no endpoint
            ClusterNotFoundError: If no cluster has the requested name
            CertificateDataError: If the matching cluster's CA is not valid base64
        """
        kubeconfig = Kubeconfig()

        clusters = self.client.list_clusters(self.project, self.cluster_name, zone=self.zone)

        for cluster in clusters:
            if cluster.get("name") != self.cluster_name:
                continue

            endpoint = cluster.get("endpoint")
            if not endpoint:
                raise ClusterLookupError(
                    f"cluster [{self.cluster_name}] in project [{self.project}] has no endpoint "
                    f"(status: {cluster.get('status')})",
                    cluster_name=self.cluster_name,
                    operation="list_clusters",
                )

            cert = decode_ca_certificate(
                (cluster.get("masterAuth") or {}).get("clusterCaCertificate"),
                self.cluster_name,
                "list_clusters",
            )

            kubeconfig.clusters[self.cluster_name] = KubeconfigCluster(
                server="https://" + endpoint,
                certificate_authority_data=cert,
            )
            kubeconfig.contexts[self.cluster_name] = KubeconfigContext(
                cluster=self.cluster_name,
                auth_info=self.cluster_name,
            )
            kubeconfig.auth_infos[self.cluster_name] = KubeconfigAuthInfo(
                auth_provider=AuthProviderConfig(
                    name=GKE_AUTH_PROVIDER,
                    config={"scopes": GKE_AUTH_SCOPE},
                ),
            )
            kubeconfig.current_context = self.cluster_name

            logger.info(
                "gke_cluster_found",
                cluster_name=self.cluster_name,
                project=self.project,
                location=cluster.get("location"),
            )
            return kubeconfig

        logger.error(
            "gke_cluster_not_found",
            cluster_name=self.cluster_name,
            project=self.project,
            zone=self.zone,
            scanned=len(clusters),
        )
        raise ClusterNotFoundError(
            f"error finding container cluster [{self.cluster_name}] in project "
            f"[{self.project}] and zone [{self.zone}]",
            cluster_name=self.cluster_name,
            operation="list_clusters",
        )

    def connection_config(self) -> ConnectionConfig:
        """Discover the cluster and resolve its context.

        Returns:
            ConnectionConfig carrying the ``gcp`` auth-provider reference
        """
        kubeconfig = self.build_kubeconfig()

        try:
            return kubeconfig.connection_config(self.cluster_name)
        except KubeCloudError as e:
            e.cluster_name = self.cluster_name
            raise

    def new_for_kubernetes(self) -> Any:
        """Return a dynamic Kubernetes client for the GKE cluster.

        Returns:
            Client produced by the client factory

        Raises:
            KubeCloudError: If lookup, CA decoding or client creation fails
        """
        logger.info(
            "creating_gke_kubernetes_client",
            cluster_name=self.cluster_name,
            project=self.project,
            zone=self.zone,
        )
        connection = self.connection_config()

        try:
            return self.client_factory(connection)
        except KubeCloudError:
            raise
        except Exception as e:
            logger.error(
                "gke_kubernetes_client_failed", cluster_name=self.cluster_name, error=str(e)
            )
            raise DelegationError(
                f"failed to create Kubernetes configuration for cluster "
                f"[{self.cluster_name}]: {e}",
                cluster_name=self.cluster_name,
                operation="new_for_kubernetes",
            ) from e


def new_gke_config(
    cluster_name: str,
    project: str,
    zone: str,
    *,
    service: Any | None = None,
    timeout: float | None = None,
    client_factory: ClientFactory | None = None,
) -> GKEConfig:
    """Create a GKE config for the named cluster.

    Args:
        cluster_name: Name of the GKE cluster
        project: GCP project ID
        zone: Zone the cluster was requested in
        service: Existing container v1 discovery resource (optional)
        timeout: Timeout in seconds for GKE API calls (optional)
        client_factory: Callable building a client from a ConnectionConfig (optional)

    Returns:
        GKEConfig ready to produce clients

    Raises:
        ConfigurationError: If the container service cannot be built
    """
    return GKEConfig(
        cluster_name,
        project,
        zone,
        service=service,
        timeout=timeout,
        client_factory=client_factory,
    )
