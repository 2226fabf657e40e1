"""CA certificate decoding shared by the provider adapters."""

import base64
import binascii

from kubecloud.core.exceptions import CertificateDataError


def decode_ca_certificate(raw: str | None, cluster_name: str, operation: str) -> bytes:
    """Decode a standard-base64 CA certificate as returned by a provider API.

    Line breaks are ignored; anything else outside the base64 alphabet is
    rejected, as is an empty value.

    Args:
        raw: Base64 text from the provider response
        cluster_name: Cluster the certificate belongs to
        operation: Operation name for error context

    Returns:
        Decoded certificate bytes

    Raises:
        CertificateDataError: If the value is missing, empty or not base64
    """
    if not raw:
        raise CertificateDataError(
            f"missing certificate authority data for cluster [{cluster_name}]",
            raw_value=raw,
            cluster_name=cluster_name,
            operation=operation,
        )

    try:
        cert = base64.b64decode(raw.replace("\r", "").replace("\n", ""), validate=True)
    except (binascii.Error, ValueError) as e:
        raise CertificateDataError(
            f"invalid certificate for cluster [{cluster_name}] cert [{raw}]: {e}",
            raw_value=raw,
            cluster_name=cluster_name,
            operation=operation,
        ) from e

    if not cert:
        raise CertificateDataError(
            f"empty certificate authority data for cluster [{cluster_name}] cert [{raw}]",
            raw_value=raw,
            cluster_name=cluster_name,
            operation=operation,
        )

    return cert
