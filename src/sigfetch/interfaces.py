"""Collaborator interfaces consumed by the downloader"""

from abc import ABC, abstractmethod

from sigfetch.data.models import Digest, FetchResult, VerificationOutcome


class Transport(ABC):
    """Blocking retrieval of a URL"""

    @abstractmethod
    def fetch(self, url: str) -> FetchResult:
        """Fetch a URL.

        Ordinary network failures are reported through ``succeeded=False``;
        only misuse may raise.
        """


class SignatureVerifier(ABC):
    """Checks a detached signature over raw content"""

    @abstractmethod
    def verify(
        self,
        content: bytes,
        signature: bytes,
        trusted_fingerprints: frozenset[str],
    ) -> VerificationOutcome:
        """Verify ``signature`` over ``content`` against trusted signer fingerprints"""


class ChecksumService(ABC):
    """Computes and compares content digests"""

    @abstractmethod
    def matches(self, content: bytes, expected: Digest) -> bool:
        """Check whether content hashes to the expected digest"""

    @abstractmethod
    def digest(self, content: bytes, algorithm: str) -> Digest:
        """Compute the digest of content"""


class FingerprintRegistry(ABC):
    """Source of the currently trusted signer fingerprints"""

    @abstractmethod
    def known_fingerprints(self) -> frozenset[str]:
        """Return the trusted fingerprints as of now"""
