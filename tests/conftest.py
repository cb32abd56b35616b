"""
Shared pytest fixtures for jwtgate tests.

This module provides common fixtures including:
- Host configuration providers (in-memory and mocked)
- RSA key pairs written to cert/key files
- Request builders for the authenticator
"""

import os
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jwtgate.config.provider import DictConfigProvider
from jwtgate.modules.auth.interfaces import HttpRequest


# =============================================================================
# Host Configuration
# =============================================================================

@pytest.fixture
def empty_config_provider():
    """Host configuration that has no values at all."""
    return DictConfigProvider()


@pytest.fixture
def mock_config_provider():
    """
    Host configuration backed by a dict, with lookups recorded.

    Tests fill ``mock_config_provider.values`` and inspect
    ``mock_config_provider.get_config`` calls.
    """
    values: Dict[str, Any] = {}
    provider = MagicMock()
    provider.values = values
    provider.get_config.side_effect = lambda key: values.get(key)
    return provider


# =============================================================================
# Key Material
# =============================================================================

@dataclass
class RSAKeyFiles:
    """PEM encoded RSA key pair and the files holding it."""
    private_pem: bytes
    public_pem: bytes
    private_path: str
    public_path: str


@pytest.fixture(scope="session")
def rsa_private_key():
    """Session-wide RSA key; generation is slow."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def rsa_key_files(rsa_private_key, tmp_path) -> RSAKeyFiles:
    """Write the RSA key pair to PEM files."""
    private_pem = rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    )
    public_pem = rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    )

    private_path = tmp_path / "jwt_private.pem"
    public_path = tmp_path / "jwt_public.pem"
    private_path.write_bytes(private_pem)
    public_path.write_bytes(public_pem)

    return RSAKeyFiles(
        private_pem=private_pem,
        public_pem=public_pem,
        private_path=str(private_path),
        public_path=str(public_path)
    )


@pytest.fixture
def rsa_cert_file(rsa_private_key, tmp_path) -> str:
    """Write a self-signed certificate for the RSA key."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "jwtgate-test")])
    now = datetime.now(timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(rsa_private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
        .sign(rsa_private_key, hashes.SHA256())
    )

    path = tmp_path / "jwt_cert.pem"
    path.write_bytes(certificate.public_bytes(serialization.Encoding.PEM))
    return str(path)


@pytest.fixture
def secret_file(tmp_path) -> str:
    """A cert file holding a plain HMAC secret."""
    path = tmp_path / "jwt_secret.key"
    path.write_bytes(b"file-secret-value")
    return str(path)


# =============================================================================
# Requests
# =============================================================================

def make_request(authorization: Optional[str] = None) -> HttpRequest:
    """Build a request with an optional authorization header."""
    header = {}
    if authorization is not None:
        header["authorization"] = authorization
    return HttpRequest(header=header)


@pytest.fixture
def request_factory():
    """Expose make_request to tests as a fixture."""
    return make_request


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Tests running the FastAPI middleware end to end"
    )
