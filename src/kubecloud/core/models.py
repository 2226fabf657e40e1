"""Core data models for kubecloud."""

import base64
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from kubecloud.core.exceptions import ConfigurationError

DEFAULT_CONTEXT_NAME = "kubecloud"


class AuthProviderConfig(BaseModel):
    """Reference to a delegated auth-provider plugin.

    The plugin is resolved by the Kubernetes client library at connection
    time; kubecloud only names it.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Auth-provider plugin name, e.g. 'gcp'")
    config: dict[str, str] = Field(default_factory=dict)


class ClusterEndpoint(BaseModel):
    """Network endpoint and trust anchor discovered for a cluster."""

    model_config = ConfigDict(frozen=True)

    host: str
    ca_data: bytes = Field(..., repr=False)


class ConnectionConfig(BaseModel):
    """Host, CA and exactly one credential for a cluster API server."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., description="API server URL")
    ca_data: bytes = Field(..., repr=False, description="PEM CA bundle")
    bearer_token: str | None = Field(None, repr=False)
    auth_provider: AuthProviderConfig | None = None

    @model_validator(mode="after")
    def check_single_credential(self) -> "ConnectionConfig":
        """Require exactly one of bearer_token or auth_provider."""
        if (self.bearer_token is None) == (self.auth_provider is None):
            raise ValueError("exactly one of bearer_token or auth_provider must be set")
        return self

    def to_kubeconfig_dict(self, name: str = DEFAULT_CONTEXT_NAME) -> dict[str, Any]:
        """Render as a single-context kubeconfig document.

        Args:
            name: Name used for the cluster, user and context entries

        Returns:
            Kubeconfig dictionary
        """
        user: dict[str, Any] = {"token": self.bearer_token}
        if self.auth_provider is not None:
            user = {
                "auth-provider": {
                    "name": self.auth_provider.name,
                    "config": dict(self.auth_provider.config),
                }
            }

        return {
            "apiVersion": "v1",
            "kind": "Config",
            "clusters": [
                {
                    "name": name,
                    "cluster": {
                        "server": self.host,
                        "certificate-authority-data": base64.b64encode(self.ca_data).decode(
                            "ascii"
                        ),
                    },
                }
            ],
            "users": [{"name": name, "user": user}],
            "contexts": [{"name": name, "context": {"cluster": name, "user": name}}],
            "current-context": name,
        }


class KubeconfigCluster(BaseModel):
    """Cluster entry of a named kubeconfig."""

    server: str
    certificate_authority_data: bytes = Field(..., repr=False)


class KubeconfigAuthInfo(BaseModel):
    """Auth-info (user) entry of a named kubeconfig."""

    token: str | None = Field(None, repr=False)
    auth_provider: AuthProviderConfig | None = None


class KubeconfigContext(BaseModel):
    """Context entry linking a cluster entry to an auth-info entry."""

    cluster: str
    auth_info: str


class Kubeconfig(BaseModel):
    """Named kubeconfig structure with clusters, auth-infos and contexts."""

    api_version: str = "v1"
    kind: str = "Config"
    clusters: dict[str, KubeconfigCluster] = Field(default_factory=dict)
    auth_infos: dict[str, KubeconfigAuthInfo] = Field(default_factory=dict)
    contexts: dict[str, KubeconfigContext] = Field(default_factory=dict)
    current_context: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the standard kubeconfig document layout.

        Returns:
            Kubeconfig dictionary with base64-encoded CA data
        """
        users = []
        for name, auth_info in self.auth_infos.items():
            user: dict[str, Any] = {}
            if auth_info.token is not None:
                user["token"] = auth_info.token
            if auth_info.auth_provider is not None:
                user["auth-provider"] = {
                    "name": auth_info.auth_provider.name,
                    "config": dict(auth_info.auth_provider.config),
                }
            users.append({"name": name, "user": user})

        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "clusters": [
                {
                    "name": name,
                    "cluster": {
                        "server": cluster.server,
                        "certificate-authority-data": base64.b64encode(
                            cluster.certificate_authority_data
                        ).decode("ascii"),
                    },
                }
                for name, cluster in self.clusters.items()
            ],
            "users": users,
            "contexts": [
                {"name": name, "context": {"cluster": ctx.cluster, "user": ctx.auth_info}}
                for name, ctx in self.contexts.items()
            ],
            "current-context": self.current_context,
        }

    def connection_config(self, context: str | None = None) -> ConnectionConfig:
        """Resolve one context into a connection config without prompting.

        Args:
            context: Context name (defaults to current_context)

        Returns:
            ConnectionConfig for the selected context

        Raises:
            ConfigurationError: If the context or what it references is missing
        """
        context_name = context or self.current_context
        if not context_name:
            raise ConfigurationError("no context selected")

        ctx = self.contexts.get(context_name)
        if ctx is None:
            raise ConfigurationError(f"context not found: {context_name}")

        cluster = self.clusters.get(ctx.cluster)
        if cluster is None:
            raise ConfigurationError(
                f"cluster [{ctx.cluster}] referenced by context [{context_name}] not found"
            )

        auth_info = self.auth_infos.get(ctx.auth_info)
        if auth_info is None:
            raise ConfigurationError(
                f"auth info [{ctx.auth_info}] referenced by context [{context_name}] not found"
            )

        try:
            return ConnectionConfig(
                host=cluster.server,
                ca_data=cluster.certificate_authority_data,
                bearer_token=auth_info.token,
                auth_provider=auth_info.auth_provider,
            )
        except ValueError as e:
            raise ConfigurationError(
                f"invalid credentials for context [{context_name}]: {e}"
            ) from e
