"""AWS client for EKS identity tokens and cluster description."""

from typing import Any, cast

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from botocore.model import ServiceId
from botocore.signers import RequestSigner

from kubecloud.core.exceptions import (
    ClusterLookupError,
    ClusterNotFoundError,
    ConfigurationError,
    SigningError,
)
from kubecloud.utils.logging import get_logger

logger = get_logger(__name__)

STS_CLUSTER_HEADER = "x-k8s-aws-id"
PRESIGN_EXPIRES_SECONDS = 60


class EKSClient:
    """AWS client exposing the two views an EKS connection needs.

    Both views are built from one resolved session and region: a request
    signer for STS ``GetCallerIdentity`` and a boto3 EKS client for
    ``DescribeCluster``.
    """

    def __init__(self, session: boto3.Session | None = None, timeout: float | None = None):
        """Initialize EKS client.

        Args:
            session: Existing boto3 session (optional, ambient config otherwise)
            timeout: Connect/read timeout in seconds for EKS API calls (optional)

        Raises:
            ConfigurationError: If the session is unusable or has no region
        """
        try:
            self.session = session or boto3.Session()
        except BotoCoreError as e:
            raise ConfigurationError(f"error loading AWS configuration: {e}") from e

        self.region = self.session.region_name
        if not self.region:
            raise ConfigurationError("missing region from config")

        client_config = None
        if timeout is not None:
            client_config = Config(connect_timeout=timeout, read_timeout=timeout)

        try:
            self.eks = self.session.client("eks", region_name=self.region, config=client_config)
        except BotoCoreError as e:
            raise ConfigurationError(f"error creating EKS client: {e}") from e

        logger.debug("eks_client_initialized", region=self.region)

    def presign_caller_identity(self, cluster_name: str) -> str:
        """Presign an STS GetCallerIdentity request bound to a cluster.

        The request carries the ``x-k8s-aws-id`` header, so the signature
        only verifies for that cluster. Nothing is sent over the network.

        Args:
            cluster_name: Name of the EKS cluster

        Returns:
            Presigned URL valid for 60 seconds

        Raises:
            SigningError: If credentials are unavailable or signing fails
        """
        credentials = self.session.get_credentials()
        if credentials is None:
            raise SigningError(
                f"no AWS credentials available to sign token for cluster [{cluster_name}]",
                cluster_name=cluster_name,
                operation="presign_caller_identity",
            )

        signer = RequestSigner(
            ServiceId("sts"),
            self.region,
            "sts",
            "v4",
            credentials,
            self.session.events,
        )

        request_params = {
            "method": "GET",
            "url": (
                f"https://sts.{self.region}.amazonaws.com/"
                "?Action=GetCallerIdentity&Version=2011-06-15"
            ),
            "body": {},
            "headers": {STS_CLUSTER_HEADER: cluster_name},
            "context": {},
        }

        try:
            presigned_url = signer.generate_presigned_url(
                request_params,
                region_name=self.region,
                expires_in=PRESIGN_EXPIRES_SECONDS,
                operation_name="",
            )
        except (BotoCoreError, ValueError) as e:
            logger.error("presign_failed", cluster_name=cluster_name, error=str(e))
            raise SigningError(
                f"error pre-signing request for cluster [{cluster_name}]: {e}",
                cluster_name=cluster_name,
                operation="presign_caller_identity",
            ) from e

        logger.debug("caller_identity_presigned", cluster_name=cluster_name, region=self.region)
        return cast(str, presigned_url)

    def describe_cluster(self, cluster_name: str) -> dict[str, Any]:
        """Get EKS cluster information.

        Args:
            cluster_name: Name of the EKS cluster

        Returns:
            The ``cluster`` document from DescribeCluster

        Raises:
            ClusterNotFoundError: If the cluster does not exist
            ClusterLookupError: If the cluster cannot be described
        """
        try:
            logger.debug("describing_eks_cluster", cluster_name=cluster_name)

            response = self.eks.describe_cluster(name=cluster_name)
            cluster_info = cast(dict[str, Any], response["cluster"])

            logger.info("eks_cluster_described", cluster_name=cluster_name)
            return cluster_info

        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            logger.error(
                "eks_cluster_describe_failed",
                cluster_name=cluster_name,
                error_code=error_code,
            )

            if error_code == "ResourceNotFoundException":
                raise ClusterNotFoundError(
                    f"EKS cluster not found: [{cluster_name}]",
                    cluster_name=cluster_name,
                    operation="describe_cluster",
                ) from e
            raise ClusterLookupError(
                f"error describing cluster: [{cluster_name}]: {error_code}",
                cluster_name=cluster_name,
                operation="describe_cluster",
            ) from e

        except BotoCoreError as e:
            logger.error("eks_cluster_describe_failed", cluster_name=cluster_name, error=str(e))
            raise ClusterLookupError(
                f"error describing cluster: [{cluster_name}]: {e}",
                cluster_name=cluster_name,
                operation="describe_cluster",
            ) from e
