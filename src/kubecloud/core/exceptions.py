"""Custom exceptions for kubecloud."""


class KubeCloudError(Exception):
    """Base exception for all kubecloud errors.

    Attributes:
        cluster_name: Cluster the failing operation targeted (if known)
        operation: Operation that failed (if known)
    """

    def __init__(
        self,
        message: str,
        cluster_name: str | None = None,
        operation: str | None = None,
    ):
        """Initialize error.

        Args:
            message: Error message
            cluster_name: Target cluster name
            operation: Failing operation name
        """
        super().__init__(message)
        self.cluster_name = cluster_name
        self.operation = operation


class ConfigurationError(KubeCloudError):
    """Provider prerequisites or configuration are missing or invalid."""


class ClusterLookupError(KubeCloudError):
    """Cluster could not be described or listed."""


class ClusterNotFoundError(ClusterLookupError):
    """No cluster matched the requested name."""


class CertificateDataError(KubeCloudError):
    """Cluster CA certificate is not valid base64.

    Attributes:
        raw_value: The undecodable value as returned by the provider
    """

    def __init__(
        self,
        message: str,
        raw_value: str | None,
        cluster_name: str | None = None,
        operation: str | None = None,
    ):
        super().__init__(message, cluster_name=cluster_name, operation=operation)
        self.raw_value = raw_value


class SigningError(KubeCloudError):
    """Presigning the identity request failed."""


class DelegationError(KubeCloudError):
    """Kubernetes client construction from a connection config failed."""
