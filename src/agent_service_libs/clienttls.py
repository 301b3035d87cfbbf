"""
Client-side TLS configuration builder.

Assembles an ``ssl.SSLContext`` for data-sync transports from the TLS
section of a plugin configuration. No handshake happens here; the caller
decides (via ``ClientTLS.enabled``) whether to use the returned context.

Usage:
    from agent_service_libs.clienttls import ClientTLS, create_tls_config

    tls = create_tls_config(ClientTLS(ca_file="/etc/agent/ca.pem"))
    conn = tls.context.wrap_socket(sock, server_hostname=host)
"""

from __future__ import annotations

import os
import re
import ssl
import warnings
from dataclasses import dataclass
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding
from pydantic import BaseModel, ConfigDict, Field

from agent_service_libs.error_handling import DecodeFailureError, IOFailureError
from agent_service_libs.logging_utils import create_service_logger

__all__ = ["ClientTLS", "ClientTLSConfig", "create_tls_config"]

logger = create_service_logger("clienttls")

# Lowest accepted protocol; callers may raise it on the returned context.
MIN_TLS_VERSION = ssl.TLSVersion.TLSv1

_PEM_CERTIFICATE_BLOCK = re.compile(
    rb"-----BEGIN CERTIFICATE-----\r?\n.*?-----END CERTIFICATE-----", re.DOTALL
)


class ClientTLS(BaseModel):
    """Client side TLS settings as found in plugin config files."""

    enabled: bool = Field(default=False, description="Enable/disable TLS")
    skip_verify: bool = Field(
        default=False,
        alias="skip-verify",
        description="Skip verification of server name and certificate",
    )
    cert_file: str = Field(default="", alias="cert-file", description="Client certificate")
    key_file: str = Field(default="", alias="key-file", description="Client private key")
    ca_file: str = Field(default="", alias="ca-file", description="Certificate authority bundle")

    model_config = ConfigDict(populate_by_name=True)


@dataclass(frozen=True)
class ClientTLSConfig:
    """Assembled client TLS configuration."""

    context: ssl.SSLContext
    certificates: tuple[tuple[str, str], ...]
    root_ca_count: int
    insecure_skip_verify: bool
    min_version: ssl.TLSVersion


def _new_client_context() -> ssl.SSLContext:
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    with warnings.catch_warnings():
        # Python flags TLS 1.0 as deprecated whenever it is selected
        warnings.simplefilter("ignore", DeprecationWarning)
        context.minimum_version = MIN_TLS_VERSION
    return context


def _load_client_keypair(context: ssl.SSLContext, cert_file: str, key_file: str) -> None:
    try:
        # Never prompt for a passphrase; an encrypted key fails to load
        context.load_cert_chain(certfile=cert_file, keyfile=key_file, password=b"")
    except ssl.SSLError as e:
        # OpenSSL can report an unreadable key file as a decode error
        for path in (cert_file, key_file):
            if not os.access(path, os.R_OK):
                raise IOFailureError(path, "Failed to read X509 key pair") from e
        raise DecodeFailureError(
            f"{cert_file}, {key_file}", f"Failed to load X509 key pair ({e})"
        ) from e
    except OSError as e:
        path = e.filename or f"{cert_file}, {key_file}"
        raise IOFailureError(path, f"Failed to read X509 key pair ({e.strerror or e})") from e


def _parse_pem_certificates(pem_bytes: bytes) -> list[x509.Certificate]:
    """Parse every CERTIFICATE block, skipping blocks that do not decode."""
    certificates: list[x509.Certificate] = []
    for match in _PEM_CERTIFICATE_BLOCK.finditer(pem_bytes):
        try:
            certificates.append(x509.load_pem_x509_certificate(match.group(0)))
        except ValueError:
            logger.debug("Skipping undecodable certificate block", offset=match.start())
    return certificates


def _load_root_cas(context: ssl.SSLContext, ca_file: str) -> int:
    try:
        pem_bytes = Path(ca_file).read_bytes()
    except OSError as e:
        raise IOFailureError(ca_file, f"Failed to read CA file ({e.strerror or e})") from e

    certificates = _parse_pem_certificates(pem_bytes)
    if not certificates:
        raise DecodeFailureError(ca_file, "Failed to add CA from file")

    # Install only what parsed, as concatenated DER
    cadata = b"".join(cert.public_bytes(Encoding.DER) for cert in certificates)
    try:
        context.load_verify_locations(cadata=cadata)
    except ssl.SSLError as e:
        raise DecodeFailureError(ca_file, f"Failed to add CA from file ({e})") from e
    return len(certificates)


def create_tls_config(config: ClientTLS) -> ClientTLSConfig:
    """
    Build a client TLS configuration from ``config``.

    Args:
        config: TLS settings; ``enabled`` is not consumed here

    Returns:
        ClientTLSConfig wrapping the prepared SSLContext

    Raises:
        IOFailureError: key pair or CA file cannot be read
        DecodeFailureError: key pair cannot be assembled, or the CA file
            contains no certificate
    """
    context = _new_client_context()

    certificates: tuple[tuple[str, str], ...] = ()
    if config.cert_file and config.key_file:
        _load_client_keypair(context, config.cert_file, config.key_file)
        certificates = ((config.cert_file, config.key_file),)

    if config.ca_file:
        root_ca_count = _load_root_cas(context, config.ca_file)
    else:
        context.load_default_certs(ssl.Purpose.SERVER_AUTH)
        root_ca_count = 0

    if config.skip_verify:
        # check_hostname must be cleared before verify_mode may drop to CERT_NONE
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        logger.warning("TLS server verification disabled", ca_file=config.ca_file or None)

    logger.debug(
        "Client TLS configuration assembled",
        client_certificates=len(certificates),
        root_ca_count=root_ca_count,
        skip_verify=config.skip_verify,
    )

    return ClientTLSConfig(
        context=context,
        certificates=certificates,
        root_ca_count=root_ca_count,
        insecure_skip_verify=config.skip_verify,
        min_version=MIN_TLS_VERSION,
    )
