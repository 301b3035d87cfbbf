from __future__ import annotations

import logging
from collections.abc import Generator
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import structlog
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID


@dataclass
class TLSAssets:
    """Paths of throwaway TLS material written to tmp_path."""

    cert_file: Path
    key_file: Path
    other_key_file: Path
    ca_file: Path


def _write_key(path: Path, key: ec.EllipticCurvePrivateKey) -> None:
    path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )


def _self_signed(key: ec.EllipticCurvePrivateKey, common_name: str) -> x509.Certificate:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(key, hashes.SHA256())
    )


@pytest.fixture
def tls_assets(tmp_path: Path) -> TLSAssets:
    """Provide a self-signed certificate, its key, an unrelated key and a CA bundle."""
    key = ec.generate_private_key(ec.SECP256R1())
    other_key = ec.generate_private_key(ec.SECP256R1())
    cert = _self_signed(key, "agent-test")

    assets = TLSAssets(
        cert_file=tmp_path / "client.pem",
        key_file=tmp_path / "client-key.pem",
        other_key_file=tmp_path / "other-key.pem",
        ca_file=tmp_path / "ca.pem",
    )
    cert_pem = cert.public_bytes(serialization.Encoding.PEM)
    assets.cert_file.write_bytes(cert_pem)
    assets.ca_file.write_bytes(cert_pem)
    _write_key(assets.key_file, key)
    _write_key(assets.other_key_file, other_key)
    return assets


@pytest.fixture
def clean_logging_config() -> Generator[None, None, None]:
    """Restore logging and structlog configuration after a test."""
    yield

    for handler in list(logging.root.handlers):
        handler.close()
    logging.root.handlers.clear()
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()
