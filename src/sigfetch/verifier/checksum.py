"""Checksum service over hashlib digests"""

import hmac

from sigfetch.data.models import Digest
from sigfetch.interfaces import ChecksumService
from sigfetch.utils.hashing import hash_bytes


class HashChecksumService(ChecksumService):
    """Compares content against a digest using the digest's own algorithm"""

    def digest(self, content: bytes, algorithm: str) -> Digest:
        return Digest(algorithm=algorithm, value=hash_bytes(content, algorithm))

    def matches(self, content: bytes, expected: Digest) -> bool:
        actual = self.digest(content, expected.algorithm)
        return hmac.compare_digest(actual.value, expected.value)
