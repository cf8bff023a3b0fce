"""Tests for the download-and-verify pipeline"""

import pytest
from packaging.version import Version

from sigfetch.data.models import ArtifactFile, Digest, FetchResult, VerificationOutcome, VerifiedArtifact
from sigfetch.downloader import Downloader
from sigfetch.exceptions import ChecksumMismatch, DownloadError, RetrievalFailed, VerificationFailed
from sigfetch.registry import StaticFingerprintRegistry

ARTIFACT_URL = "https://example.com/foo.phar"
SIGNATURE_URL = "https://example.com/foo.phar.asc"


@pytest.fixture
def downloader(transport, signature_verifier, checksum_service, fingerprint_registry):
    return Downloader(transport, signature_verifier, checksum_service, fingerprint_registry)


class TestDownloader:
    """Test cases for Downloader.download"""

    def test_returns_expected_artifact(self, downloader, locator, signature_verifier):
        """Test a fully verified download yields the expected artifact"""
        expected = VerifiedArtifact(
            name="foo",
            version=Version("1.0.0"),
            content=ArtifactFile(filename="foo.phar", content=b"phar-content"),
            signer_fingerprint="fooFingerprint",
        )

        assert downloader.download(locator) == expected
        signature_verifier.verify.assert_called_once_with(b"phar-content", b"phar-signature", frozenset())

    def test_fetches_artifact_before_signature(self, downloader, locator, transport):
        """Test fetch order is artifact first, then signature"""
        downloader.download(locator)

        urls = [call.args[0] for call in transport.fetch.call_args_list]
        assert urls == [ARTIFACT_URL, SIGNATURE_URL]

    def test_verification_failure_raises(self, downloader, locator, signature_verifier, checksum_service):
        """Test a rejected signature raises with the verifier's message"""
        signature_verifier.verify.return_value = VerificationOutcome(
            succeeded=False,
            signer_fingerprint="fooFingerprint",
            status_message="Some Message",
        )

        with pytest.raises(VerificationFailed) as exc_info:
            downloader.download(locator)

        assert exc_info.value.status_message == "Some Message"
        checksum_service.matches.assert_not_called()

    def test_verification_failure_skips_checksum_even_with_digest(
        self, downloader, locator, signature_verifier, checksum_service
    ):
        """Test a matching digest never rescues a bad signature"""
        pinned = locator.model_copy(update={"expected_digest": Digest(algorithm="sha256", value="ab" * 32)})
        signature_verifier.verify.return_value = VerificationOutcome(succeeded=False, status_message="Bad signature")
        checksum_service.matches.return_value = True

        with pytest.raises(VerificationFailed):
            downloader.download(pinned)

        checksum_service.matches.assert_not_called()

    def test_artifact_fetch_failure(self, downloader, locator, responses, signature_verifier):
        """Test a failed artifact fetch raises before any verification"""
        responses[ARTIFACT_URL] = FetchResult(succeeded=False, status_code=500)

        with pytest.raises(RetrievalFailed) as exc_info:
            downloader.download(locator)

        assert exc_info.value.url == ARTIFACT_URL
        signature_verifier.verify.assert_not_called()

    def test_signature_fetch_failure(self, downloader, locator, responses, signature_verifier, fingerprint_registry):
        """Test a failed signature fetch raises before any verification"""
        responses[SIGNATURE_URL] = FetchResult(succeeded=False, status_code=404)

        with pytest.raises(RetrievalFailed) as exc_info:
            downloader.download(locator)

        assert exc_info.value.url == SIGNATURE_URL
        signature_verifier.verify.assert_not_called()
        fingerprint_registry.known_fingerprints.assert_not_called()

    def test_checksum_mismatch(self, downloader, locator, checksum_service):
        """Test a pinned digest that does not match raises even after a good signature"""
        expected = Digest(algorithm="sha1", value="1" * 40)
        actual = Digest(algorithm="sha1", value="2" * 40)
        pinned = locator.model_copy(update={"expected_digest": expected})
        checksum_service.matches.return_value = False
        checksum_service.digest.return_value = actual

        with pytest.raises(ChecksumMismatch) as exc_info:
            downloader.download(pinned)

        assert exc_info.value.expected == expected
        assert exc_info.value.actual == actual
        checksum_service.matches.assert_called_once_with(b"phar-content", expected)
        checksum_service.digest.assert_called_once_with(b"phar-content", "sha1")

    def test_checksum_match_returns_artifact(self, downloader, locator, checksum_service):
        """Test a matching pinned digest lets the artifact through"""
        pinned = locator.model_copy(update={"expected_digest": Digest(algorithm="sha256", value="ab" * 32)})
        checksum_service.matches.return_value = True

        artifact = downloader.download(pinned)

        assert artifact.content.content == b"phar-content"
        checksum_service.digest.assert_not_called()

    def test_no_digest_skips_checksum(self, downloader, locator, checksum_service):
        """Test the checksum service is unused when no digest is pinned"""
        downloader.download(locator)

        checksum_service.matches.assert_not_called()
        checksum_service.digest.assert_not_called()

    def test_registry_queried_on_every_call(self, downloader, locator, fingerprint_registry):
        """Test trusted fingerprints are never cached between calls"""
        downloader.download(locator)
        downloader.download(locator)

        assert fingerprint_registry.known_fingerprints.call_count == 2

    def test_registry_change_affects_next_call(self, transport, checksum_service, locator):
        """Test revoking a fingerprint takes effect on the following download"""
        from sigfetch.interfaces import SignatureVerifier

        class TrustingVerifier(SignatureVerifier):
            def verify(self, content, signature, trusted_fingerprints):
                if "ABCD" in trusted_fingerprints:
                    return VerificationOutcome(succeeded=True, signer_fingerprint="ABCD")
                return VerificationOutcome(succeeded=False, status_message="untrusted key ABCD")

        registry = StaticFingerprintRegistry(["abcd"])
        downloader = Downloader(transport, TrustingVerifier(), checksum_service, registry)

        assert downloader.download(locator).signer_fingerprint == "ABCD"

        registry.remove("ABCD")

        with pytest.raises(VerificationFailed, match="untrusted key ABCD"):
            downloader.download(locator)

    def test_errors_share_base_class(self, downloader, locator, responses):
        """Test callers can catch every failure through DownloadError"""
        responses[ARTIFACT_URL] = FetchResult(succeeded=False)

        with pytest.raises(DownloadError):
            downloader.download(locator)

    def test_collaborators_exposed(self, downloader, transport, signature_verifier, checksum_service, fingerprint_registry):
        """Test injected collaborators are reachable and read-only"""
        assert downloader.transport is transport
        assert downloader.signature_verifier is signature_verifier
        assert downloader.checksum_service is checksum_service
        assert downloader.fingerprint_registry is fingerprint_registry

        with pytest.raises(AttributeError):
            downloader.transport = None
