"""Pytest configuration and fixtures"""

from unittest.mock import Mock

import pytest
from packaging.version import Version

from sigfetch.data.models import ArtifactLocator, FetchResult, VerificationOutcome
from sigfetch.interfaces import ChecksumService, FingerprintRegistry, SignatureVerifier, Transport

ARTIFACT_URL = "https://example.com/foo.phar"
SIGNATURE_URL = "https://example.com/foo.phar.asc"


@pytest.fixture
def locator():
    """Locator for foo 1.0.0 without a pinned digest"""
    return ArtifactLocator(
        name="foo",
        version=Version("1.0.0"),
        artifact_url=ARTIFACT_URL,
        signature_url=SIGNATURE_URL,
    )


@pytest.fixture
def responses():
    """URL -> FetchResult table served by the transport fixture"""
    return {
        ARTIFACT_URL: FetchResult(succeeded=True, body=b"phar-content", status_code=200),
        SIGNATURE_URL: FetchResult(succeeded=True, body=b"phar-signature", status_code=200),
    }


@pytest.fixture
def transport(responses):
    """Transport mock answering from the responses table"""
    mock = Mock(spec=Transport)
    mock.fetch.side_effect = lambda url: responses.get(url, FetchResult(succeeded=False, status_code=404))
    return mock


@pytest.fixture
def signature_verifier():
    """Signature verifier mock that accepts by default"""
    mock = Mock(spec=SignatureVerifier)
    mock.verify.return_value = VerificationOutcome(succeeded=True, signer_fingerprint="fooFingerprint")
    return mock


@pytest.fixture
def checksum_service():
    """Checksum service mock"""
    return Mock(spec=ChecksumService)


@pytest.fixture
def fingerprint_registry():
    """Registry mock with no trusted fingerprints"""
    mock = Mock(spec=FingerprintRegistry)
    mock.known_fingerprints.return_value = frozenset()
    return mock
