"""Download-and-verify pipeline"""

from sigfetch.data.models import ArtifactFile, ArtifactLocator, VerifiedArtifact
from sigfetch.exceptions import ChecksumMismatch, RetrievalFailed, VerificationFailed
from sigfetch.interfaces import (
    ChecksumService,
    FingerprintRegistry,
    SignatureVerifier,
    Transport,
)
from sigfetch.utils.logging import get_logger

logger = get_logger(__name__)


class Downloader:
    """Fetches an artifact and its detached signature and only returns it once verified.

    Signature verification is the primary gate. A pinned digest on the locator
    is checked afterwards as a second, independent gate; it never replaces the
    signature check. The first failure ends the call, nothing is retried here.
    """

    def __init__(
        self,
        transport: Transport,
        signature_verifier: SignatureVerifier,
        checksum_service: ChecksumService,
        fingerprint_registry: FingerprintRegistry,
    ):
        self._transport = transport
        self._signature_verifier = signature_verifier
        self._checksum_service = checksum_service
        self._fingerprint_registry = fingerprint_registry

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def signature_verifier(self) -> SignatureVerifier:
        return self._signature_verifier

    @property
    def checksum_service(self) -> ChecksumService:
        return self._checksum_service

    @property
    def fingerprint_registry(self) -> FingerprintRegistry:
        return self._fingerprint_registry

    def download(self, locator: ArtifactLocator) -> VerifiedArtifact:
        """Download and verify a release artifact.

        Raises:
            RetrievalFailed: the artifact or signature could not be fetched
            VerificationFailed: the signature was rejected
            ChecksumMismatch: a pinned digest did not match the content
        """
        logger.info("Downloading %s %s from %s", locator.name, locator.version, locator.artifact_url)

        content = self._fetch(locator.artifact_url)
        signature = self._fetch(locator.signature_url)

        # Queried per call so revoked keys stop being trusted immediately
        trusted = frozenset(self._fingerprint_registry.known_fingerprints())
        logger.debug("Verifying signature against %d trusted fingerprint(s)", len(trusted))

        outcome = self._signature_verifier.verify(content, signature, trusted)
        if not outcome.succeeded:
            logger.warning(
                "Signature verification failed for %s %s: %s",
                locator.name,
                locator.version,
                outcome.status_message,
            )
            raise VerificationFailed(outcome.status_message)

        expected = locator.expected_digest
        if expected is not None:
            logger.debug("Checking %s digest", expected.algorithm)
            if not self._checksum_service.matches(content, expected):
                actual = self._checksum_service.digest(content, expected.algorithm)
                logger.warning("Checksum mismatch for %s: expected %s, got %s", locator.name, expected, actual)
                raise ChecksumMismatch(expected, actual)

        logger.info(
            "Verified %s %s, signed by %s",
            locator.name,
            locator.version,
            outcome.signer_fingerprint,
        )
        return VerifiedArtifact(
            name=locator.name,
            version=locator.version,
            content=ArtifactFile(filename=locator.artifact_filename, content=content),
            signer_fingerprint=outcome.signer_fingerprint,
        )

    def _fetch(self, url: str) -> bytes:
        logger.debug("Fetching %s", url)
        result = self._transport.fetch(url)
        if not result.succeeded:
            logger.warning("Fetch failed for %s (status %s)", url, result.status_code)
            raise RetrievalFailed(url)
        return result.body
