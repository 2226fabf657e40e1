"""Unit tests for connection and kubeconfig models."""

import base64

import pytest
from pydantic import ValidationError

from kubecloud.core.exceptions import ConfigurationError
from kubecloud.core.models import (
    AuthProviderConfig,
    ConnectionConfig,
    Kubeconfig,
    KubeconfigAuthInfo,
    KubeconfigCluster,
    KubeconfigContext,
)

GCP_PROVIDER = AuthProviderConfig(
    name="gcp", config={"scopes": "https://www.googleapis.com/auth/cloud-platform"}
)


class TestConnectionConfig:
    """Tests for ConnectionConfig."""

    def test_bearer_token(self, ca_pem: bytes) -> None:
        """Test a token-only config is valid."""
        config = ConnectionConfig(host="https://api.example", ca_data=ca_pem, bearer_token="t")

        assert config.bearer_token == "t"
        assert config.auth_provider is None

    def test_requires_a_credential(self, ca_pem: bytes) -> None:
        """Test a config without any credential is rejected."""
        with pytest.raises(ValidationError):
            ConnectionConfig(host="https://api.example", ca_data=ca_pem)

    def test_rejects_both_credentials(self, ca_pem: bytes) -> None:
        """Test token and auth-provider are mutually exclusive."""
        with pytest.raises(ValidationError):
            ConnectionConfig(
                host="https://api.example",
                ca_data=ca_pem,
                bearer_token="t",
                auth_provider=GCP_PROVIDER,
            )

    def test_repr_hides_secrets(self, ca_pem: bytes) -> None:
        """Test the token never appears in repr."""
        config = ConnectionConfig(
            host="https://api.example", ca_data=ca_pem, bearer_token="k8s-aws-v1.secret"
        )

        assert "k8s-aws-v1.secret" not in repr(config)

    def test_is_immutable(self, ca_pem: bytes) -> None:
        """Test fields cannot be reassigned."""
        config = ConnectionConfig(host="https://api.example", ca_data=ca_pem, bearer_token="t")

        with pytest.raises(ValidationError):
            config.host = "https://other"

    def test_token_kubeconfig_dict(self, ca_pem: bytes, ca_b64: str) -> None:
        """Test token configs render a single-context kubeconfig."""
        config = ConnectionConfig(host="https://api.example", ca_data=ca_pem, bearer_token="t")

        data = config.to_kubeconfig_dict()

        assert data["current-context"] == "kubecloud"
        assert data["clusters"] == [
            {
                "name": "kubecloud",
                "cluster": {"server": "https://api.example", "certificate-authority-data": ca_b64},
            }
        ]
        assert data["users"] == [{"name": "kubecloud", "user": {"token": "t"}}]
        assert data["contexts"] == [
            {"name": "kubecloud", "context": {"cluster": "kubecloud", "user": "kubecloud"}}
        ]

    def test_auth_provider_kubeconfig_dict(self, ca_pem: bytes) -> None:
        """Test auth-provider configs render the plugin reference."""
        config = ConnectionConfig(
            host="https://34.1.1.1", ca_data=ca_pem, auth_provider=GCP_PROVIDER
        )

        user = config.to_kubeconfig_dict(name="prod")["users"][0]

        assert user["name"] == "prod"
        assert user["user"] == {
            "auth-provider": {
                "name": "gcp",
                "config": {"scopes": "https://www.googleapis.com/auth/cloud-platform"},
            }
        }


    def test_auth_provider_dict_has_no_token_key(self, ca_pem: bytes) -> None:
        """Test the auth-provider branch does not depend on the token field."""
        config = ConnectionConfig.model_construct(
            host="https://34.1.1.1", ca_data=ca_pem, bearer_token=None, auth_provider=GCP_PROVIDER
        )

        user = config.to_kubeconfig_dict()["users"][0]["user"]

        assert "token" not in user
        assert user["auth-provider"]["name"] == "gcp"

@pytest.fixture
def kubeconfig(ca_pem: bytes) -> Kubeconfig:
    """Named kubeconfig with a single gcp context."""
    return Kubeconfig(
        clusters={"prod": KubeconfigCluster(server="https://34.1.1.1", certificate_authority_data=ca_pem)},
        auth_infos={"prod": KubeconfigAuthInfo(auth_provider=GCP_PROVIDER)},
        contexts={"prod": KubeconfigContext(cluster="prod", auth_info="prod")},
        current_context="prod",
    )


class TestKubeconfig:
    """Tests for the named Kubeconfig structure."""

    def test_empty_structure(self) -> None:
        """Test a fresh kubeconfig has empty mappings."""
        kubeconfig = Kubeconfig()

        assert kubeconfig.api_version == "v1"
        assert kubeconfig.kind == "Config"
        assert kubeconfig.clusters == {}
        assert kubeconfig.auth_infos == {}
        assert kubeconfig.contexts == {}

    def test_to_dict(self, kubeconfig: Kubeconfig, ca_pem: bytes) -> None:
        """Test rendering to the kubeconfig document layout."""
        data = kubeconfig.to_dict()

        assert data["apiVersion"] == "v1"
        assert data["kind"] == "Config"
        assert data["current-context"] == "prod"
        cluster = data["clusters"][0]["cluster"]
        assert base64.b64decode(cluster["certificate-authority-data"]) == ca_pem
        assert data["users"][0]["user"]["auth-provider"]["name"] == "gcp"
        assert data["contexts"][0]["context"] == {"cluster": "prod", "user": "prod"}

    def test_connection_config(self, kubeconfig: Kubeconfig, ca_pem: bytes) -> None:
        """Test resolving the selected context."""
        connection = kubeconfig.connection_config("prod")

        assert connection.host == "https://34.1.1.1"
        assert connection.ca_data == ca_pem
        assert connection.auth_provider == GCP_PROVIDER

    def test_connection_config_defaults_to_current_context(self, kubeconfig: Kubeconfig) -> None:
        """Test current_context is used when no context is given."""
        assert kubeconfig.connection_config().host == "https://34.1.1.1"

    def test_unknown_context(self, kubeconfig: Kubeconfig) -> None:
        """Test selecting a missing context fails."""
        with pytest.raises(ConfigurationError, match="context not found: dev"):
            kubeconfig.connection_config("dev")

    def test_no_context_selected(self) -> None:
        """Test an empty kubeconfig has nothing to resolve."""
        with pytest.raises(ConfigurationError, match="no context selected"):
            Kubeconfig().connection_config()

    def test_dangling_cluster_reference(self, kubeconfig: Kubeconfig) -> None:
        """Test a context pointing at a missing cluster fails."""
        kubeconfig.contexts["prod"] = KubeconfigContext(cluster="gone", auth_info="prod")

        with pytest.raises(ConfigurationError, match=r"cluster \[gone\]"):
            kubeconfig.connection_config("prod")

    def test_dangling_auth_info_reference(self, kubeconfig: Kubeconfig) -> None:
        """Test a context pointing at a missing auth-info fails."""
        kubeconfig.contexts["prod"] = KubeconfigContext(cluster="prod", auth_info="gone")

        with pytest.raises(ConfigurationError, match=r"auth info \[gone\]"):
            kubeconfig.connection_config("prod")

    def test_auth_info_without_credentials(self, kubeconfig: Kubeconfig) -> None:
        """Test an auth-info with neither token nor provider fails."""
        kubeconfig.auth_infos["prod"] = KubeconfigAuthInfo()

        with pytest.raises(ConfigurationError, match="invalid credentials"):
            kubeconfig.connection_config("prod")
