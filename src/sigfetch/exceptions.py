"""Terminal failures of the download pipeline"""

from sigfetch.data.models import Digest


class DownloadError(Exception):
    """Base class for every failure raised by Downloader.download"""


class RetrievalFailed(DownloadError):
    """A fetch of the artifact or its signature did not succeed"""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Failed to retrieve {url}")


class VerificationFailed(DownloadError):
    """The signature did not verify against a trusted fingerprint"""

    def __init__(self, status_message: str):
        self.status_message = status_message
        super().__init__(f"Signature verification failed: {status_message}")


class ChecksumMismatch(DownloadError):
    """The artifact content does not match the pinned digest"""

    def __init__(self, expected: Digest, actual: Digest):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Checksum mismatch: expected {expected}, got {actual}")
