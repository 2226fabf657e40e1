"""EKS adapter implementing the KubernetesClientProvider interface."""

import base64
import functools
from typing import Any

import boto3

from kubecloud.clients.eks_client import EKSClient
from kubecloud.clients.kubernetes_client import new_dynamic_client
from kubecloud.core.exceptions import ClusterLookupError, DelegationError, KubeCloudError
from kubecloud.core.models import ClusterEndpoint, ConnectionConfig
from kubecloud.interfaces.client_provider import ClientFactory, KubernetesClientProvider
from kubecloud.utils.certificates import decode_ca_certificate
from kubecloud.utils.logging import get_logger

logger = get_logger(__name__)

TOKEN_PREFIX = "k8s-aws-v1."


def encode_token(presigned_url: str) -> str:
    """Turn a presigned STS URL into an EKS bearer token.

    Args:
        presigned_url: Presigned GetCallerIdentity URL

    Returns:
        ``k8s-aws-v1.`` followed by the unpadded base64url-encoded URL
    """
    encoded = base64.urlsafe_b64encode(presigned_url.encode("utf-8")).decode("ascii")
    return TOKEN_PREFIX + encoded.rstrip("=")


class EKSConfig(KubernetesClientProvider):
    """Configuration needed to create a Kubernetes client for an EKS cluster.

    Credentials and region come from the ambient AWS configuration
    (environment, shared config files, instance metadata). The token is a
    presigned STS GetCallerIdentity URL, which the cluster's authenticator
    replays to learn the caller's identity.
    """

    def __init__(
        self,
        cluster_name: str,
        session: boto3.Session | None = None,
        timeout: float | None = None,
        client_factory: ClientFactory | None = None,
    ):
        """Initialize EKS config.

        Args:
            cluster_name: Name of the EKS cluster
            session: Existing boto3 session (optional)
            timeout: Timeout in seconds for EKS API calls (optional)
            client_factory: Callable building a client from a ConnectionConfig
                (defaults to a kubernetes DynamicClient)

        Raises:
            ConfigurationError: If no region can be resolved
        """
        self.cluster_name = cluster_name

        try:
            self.client = EKSClient(session=session, timeout=timeout)
        except KubeCloudError as e:
            e.cluster_name = cluster_name
            logger.error("eks_config_failed", cluster_name=cluster_name, error=str(e))
            raise

        self.client_factory = client_factory or functools.partial(
            new_dynamic_client, cluster_name=cluster_name
        )
        logger.debug("eks_config_initialized", cluster_name=cluster_name, region=self.region)

    @property
    def region(self) -> str:
        """AWS region the session resolved."""
        return self.client.region

    def generate_token(self) -> str:
        """Generate a fresh bearer token for the cluster.

        Returns:
            EKS bearer token valid for 60 seconds

        Raises:
            SigningError: If the identity request cannot be presigned
        """
        presigned_url = self.client.presign_caller_identity(self.cluster_name)
        token = encode_token(presigned_url)
        logger.info("eks_token_generated", cluster_name=self.cluster_name)
        return token

    def cluster_endpoint(self) -> ClusterEndpoint:
        """Describe the cluster and decode its endpoint and CA certificate.

        Returns:
            ClusterEndpoint with the endpoint as reported by EKS

        Raises:
            ClusterLookupError: If the cluster cannot be described
            CertificateDataError: If the CA data is not valid base64
        """
        cluster_info: dict[str, Any] = self.client.describe_cluster(self.cluster_name)

        endpoint = cluster_info.get("endpoint")
        if not endpoint:
            raise ClusterLookupError(
                f"cluster [{self.cluster_name}] has no endpoint "
                f"(status: {cluster_info.get('status')})",
                cluster_name=self.cluster_name,
                operation="describe_cluster",
            )

        ca_data = (cluster_info.get("certificateAuthority") or {}).get("data")
        cert = decode_ca_certificate(ca_data, self.cluster_name, "describe_cluster")

        return ClusterEndpoint(host=endpoint, ca_data=cert)

    def connection_config(self) -> ConnectionConfig:
        """Sign a token and discover the cluster endpoint.

        Returns:
            ConnectionConfig carrying a static bearer token
        """
        token = self.generate_token()
        endpoint = self.cluster_endpoint()

        return ConnectionConfig(host=endpoint.host, ca_data=endpoint.ca_data, bearer_token=token)

    def new_for_kubernetes(self) -> Any:
        """Return a dynamic Kubernetes client for the EKS cluster.

        Returns:
            Client produced by the client factory

        Raises:
            KubeCloudError: If signing, lookup, CA decoding or client creation fails
        """
        logger.info("creating_eks_kubernetes_client", cluster_name=self.cluster_name)
        connection = self.connection_config()

        try:
            return self.client_factory(connection)
        except KubeCloudError:
            raise
        except Exception as e:
            logger.error(
                "eks_kubernetes_client_failed", cluster_name=self.cluster_name, error=str(e)
            )
            raise DelegationError(
                f"error creating kubeconfig client for cluster [{self.cluster_name}]: {e}",
                cluster_name=self.cluster_name,
                operation="new_for_kubernetes",
            ) from e


def new_eks_config(
    cluster_name: str,
    *,
    session: boto3.Session | None = None,
    timeout: float | None = None,
    client_factory: ClientFactory | None = None,
) -> EKSConfig:
    """Create an EKS config for the named cluster.

    Args:
        cluster_name: Name of the EKS cluster
        session: Existing boto3 session (optional)
        timeout: Timeout in seconds for EKS API calls (optional)
        client_factory: Callable building a client from a ConnectionConfig (optional)

    Returns:
        EKSConfig ready to produce clients

    Raises:
        ConfigurationError: If no region can be resolved
    """
    return EKSConfig(
        cluster_name, session=session, timeout=timeout, client_factory=client_factory
    )
