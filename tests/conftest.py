"""Pytest configuration and shared fixtures."""

import base64
from typing import Any
from unittest.mock import MagicMock

import boto3
import freezegun
import pytest

CA_PEM = (
    b"-----BEGIN CERTIFICATE-----\n"
    b"MIIBszCCAVmgAwIBAgIUKubeCloudTestCertificateAuthority\n"
    b"-----END CERTIFICATE-----\n"
)
CA_B64 = base64.b64encode(CA_PEM).decode("ascii")

# kubernetes builds pydantic models on lazy attribute access, which breaks
# when freezegun scans its modules while datetime is patched.
freezegun.configure(extend_ignore_list=["kubernetes"])


@pytest.fixture
def ca_pem() -> bytes:
    """Decoded CA certificate used in provider responses."""
    return CA_PEM


@pytest.fixture
def ca_b64() -> str:
    """Base64-encoded CA certificate as returned by provider APIs."""
    return CA_B64


@pytest.fixture
def aws_session() -> boto3.Session:
    """Real boto3 session with static fake credentials.

    Presigning happens locally, so this session never touches the network.
    """
    return boto3.Session(
        aws_access_key_id="AKIDEXAMPLE",
        aws_secret_access_key="wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY",
        region_name="us-west-2",
    )


@pytest.fixture
def eks_cluster_info(ca_b64: str) -> dict[str, Any]:
    """Sample EKS DescribeCluster ``cluster`` document."""
    return {
        "name": "eks-test-us-west-2",
        "arn": "arn:aws:eks:us-west-2:123456789012:cluster/eks-test-us-west-2",
        "endpoint": "https://ABCDEF0123456789.gr7.us-west-2.eks.amazonaws.com",
        "certificateAuthority": {"data": ca_b64},
        "status": "ACTIVE",
        "version": "1.29",
    }


def gke_cluster(name: str, endpoint: str, ca_data: str, location: str = "us-central1-a"):
    """Build a container v1 Cluster resource as returned by clusters.list."""
    return {
        "name": name,
        "location": location,
        "zone": location,
        "endpoint": endpoint,
        "masterAuth": {"clusterCaCertificate": ca_data},
        "status": "RUNNING",
    }


@pytest.fixture
def gke_clusters(ca_b64: str) -> list[dict[str, Any]]:
    """Clusters a, b and target spread across zones."""
    other_ca = base64.b64encode(b"other-ca").decode("ascii")
    return [
        gke_cluster("a", "10.0.0.1", other_ca, "us-east1-b"),
        gke_cluster("b", "10.0.0.2", other_ca, "europe-west1-c"),
        gke_cluster("target", "34.123.45.67", ca_b64),
    ]


def _container_service(clusters: list[dict[str, Any]] | None = None) -> MagicMock:
    service = MagicMock()
    list_request = service.projects.return_value.zones.return_value.clusters.return_value.list
    list_request.return_value.execute.return_value = {"clusters": clusters or []}
    return service


@pytest.fixture
def make_container_service():
    """Factory for mock container v1 discovery resources returning given clusters."""
    return _container_service


@pytest.fixture
def mock_client_factory() -> MagicMock:
    """Client factory standing in for the kubernetes DynamicClient."""
    factory = MagicMock()
    factory.return_value = MagicMock(name="dynamic_client")
    return factory


def pytest_configure(config: Any) -> None:
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
