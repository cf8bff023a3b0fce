"""Sources of trusted signer fingerprints"""

import threading
from collections.abc import Iterable
from pathlib import Path

from sigfetch.config import Config
from sigfetch.interfaces import FingerprintRegistry


def normalize_fingerprint(fingerprint: str) -> str:
    """Uppercase a fingerprint and drop the spaces gpg prints between groups"""
    return "".join(fingerprint.split()).upper()


class StaticFingerprintRegistry(FingerprintRegistry):
    """In-memory fingerprint set that can be changed while in use"""

    def __init__(self, fingerprints: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._fingerprints = {normalize_fingerprint(f) for f in fingerprints}

    def add(self, fingerprint: str) -> None:
        with self._lock:
            self._fingerprints.add(normalize_fingerprint(fingerprint))

    def remove(self, fingerprint: str) -> None:
        with self._lock:
            self._fingerprints.discard(normalize_fingerprint(fingerprint))

    def known_fingerprints(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._fingerprints)


class ConfigFingerprintRegistry(FingerprintRegistry):
    """Reads ``trust.fingerprints`` from the config file on every query"""

    def __init__(self, config_path: Path | None = None, extra: Iterable[str] = ()):
        self.config_path = config_path
        self.extra = frozenset(normalize_fingerprint(f) for f in extra)

    def known_fingerprints(self) -> frozenset[str]:
        configured = Config(config_path=self.config_path).get("trust", "fingerprints", []) or []
        return frozenset(normalize_fingerprint(f) for f in configured) | self.extra
