"""Google Cloud client for GKE cluster discovery."""

from typing import Any

import google.auth
import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient import discovery
from googleapiclient.errors import Error as GoogleApiClientError

from kubecloud.core.exceptions import ClusterLookupError, ConfigurationError
from kubecloud.utils.logging import get_logger

logger = get_logger(__name__)

ALL_ZONES = "-"
CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


class GKEClient:
    """Thin wrapper around the Kubernetes Engine (container v1) API."""

    def __init__(self, service: Any | None = None, timeout: float | None = None):
        """Initialize GKE client.

        Args:
            service: Existing container v1 discovery resource (optional, built
                from application default credentials otherwise)
            timeout: Socket timeout in seconds for GKE API calls (optional)

        Raises:
            ConfigurationError: If the container service cannot be built
        """
        self.timeout = timeout

        if service is not None:
            self.service = service
        else:
            try:
                self.service = self._build_service(timeout)
            except (GoogleAuthError, GoogleApiClientError) as e:
                raise ConfigurationError(
                    f"error creating container cluster client: {e}",
                    operation="build_container_service",
                ) from e

        logger.debug("gke_client_initialized")

    @staticmethod
    def _build_service(timeout: float | None) -> Any:
        if timeout is None:
            return discovery.build("container", "v1", cache_discovery=False)

        credentials, _ = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
        http = google_auth_httplib2.AuthorizedHttp(
            credentials, http=httplib2.Http(timeout=timeout)
        )
        return discovery.build("container", "v1", http=http, cache_discovery=False)

    def list_clusters(
        self, project: str, cluster_name: str, zone: str | None = None
    ) -> list[dict[str, Any]]:
        """List every cluster in a project across all zones.

        Args:
            project: GCP project ID
            cluster_name: Cluster being looked up (error context only)
            zone: Zone the caller asked for (error context only)

        Returns:
            Cluster resources visible in the project

        Raises:
            ClusterLookupError: If the list call fails
        """
        try:
            logger.debug("listing_gke_clusters", project=project, zone=ALL_ZONES)

            request = self.service.projects().zones().clusters().list(
                projectId=project, zone=ALL_ZONES
            )
            response = request.execute()
            clusters = list(response.get("clusters") or [])

            logger.info("gke_clusters_listed", project=project, count=len(clusters))
            return clusters

        except (GoogleApiClientError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            logger.error(
                "gke_cluster_list_failed",
                cluster_name=cluster_name,
                project=project,
                zone=zone,
                error=str(e),
            )
            raise ClusterLookupError(
                f"error getting container cluster [{cluster_name}] in project [{project}] "
                f"and zone [{zone}]: {e}",
                cluster_name=cluster_name,
                operation="list_clusters",
            ) from e
