"""GPG detached signature verification"""

import subprocess
import tempfile
from pathlib import Path

from sigfetch.data.models import VerificationOutcome
from sigfetch.interfaces import SignatureVerifier
from sigfetch.registry import normalize_fingerprint
from sigfetch.utils.logging import get_logger

logger = get_logger(__name__)

STATUS_PREFIX = "[GNUPG:] "


def parse_status(output: str) -> dict[str, list[str]]:
    """Parse ``--status-fd`` output into keyword -> arguments"""
    status: dict[str, list[str]] = {}
    for line in output.splitlines():
        if not line.startswith(STATUS_PREFIX):
            continue
        parts = line[len(STATUS_PREFIX) :].split()
        if parts:
            status[parts[0]] = parts[1:]
    return status


class GPGSignatureVerifier(SignatureVerifier):
    """Verifies detached signatures with the gpg binary"""

    def __init__(self, gpg_binary: str = "gpg", home_dir: Path | str | None = None, timeout: int = 30):
        self.gpg_binary = gpg_binary
        self.home_dir = Path(home_dir) if home_dir else None
        self.timeout = timeout

    def _command(self, *args: str) -> list[str]:
        cmd = [self.gpg_binary, "--batch", "--no-tty"]
        if self.home_dir:
            cmd += ["--homedir", str(self.home_dir)]
        return cmd + list(args)

    def is_available(self) -> bool:
        """Check that the gpg binary can be executed"""
        try:
            result = subprocess.run(
                [self.gpg_binary, "--version"],
                capture_output=True,
                timeout=10,
            )
        except (OSError, subprocess.TimeoutExpired):
            return False
        return result.returncode == 0

    def verify(
        self,
        content: bytes,
        signature: bytes,
        trusted_fingerprints: frozenset[str],
    ) -> VerificationOutcome:
        if not self.is_available():
            return VerificationOutcome(succeeded=False, status_message=f"{self.gpg_binary} is not installed or not working")

        with tempfile.TemporaryDirectory(prefix="sigfetch-") as tmp:
            artifact_path = Path(tmp) / "artifact"
            signature_path = Path(tmp) / "artifact.asc"
            artifact_path.write_bytes(content)
            signature_path.write_bytes(signature)

            try:
                result = subprocess.run(
                    self._command("--status-fd", "1", "--verify", str(signature_path), str(artifact_path)),
                    capture_output=True,
                    timeout=self.timeout,
                )
            except subprocess.TimeoutExpired:
                return VerificationOutcome(
                    succeeded=False,
                    status_message=f"gpg verification timed out after {self.timeout}s",
                )

        status = parse_status(result.stdout.decode("utf-8", errors="replace"))
        stderr = result.stderr.decode("utf-8", errors="replace").strip()

        # gpg still emits VALIDSIG for these, so they must be checked first
        if "REVKEYSIG" in status:
            return VerificationOutcome(
                succeeded=False,
                status_message=f"Signature made by revoked key {status['REVKEYSIG'][0]}",
            )
        if "EXPKEYSIG" in status:
            return VerificationOutcome(
                succeeded=False,
                status_message=f"Signature made by expired key {status['EXPKEYSIG'][0]}",
            )
        if "EXPSIG" in status:
            return VerificationOutcome(succeeded=False, status_message="Signature has expired")

        if result.returncode != 0 or "GOODSIG" not in status or "VALIDSIG" not in status:
            if "NO_PUBKEY" in status:
                message = f"Signing key {status['NO_PUBKEY'][0]} is not in the keyring"
            elif "BADSIG" in status:
                message = "Bad signature"
            else:
                message = stderr or "Signature could not be verified"
            logger.debug("gpg rejected signature: %s", stderr)
            return VerificationOutcome(succeeded=False, status_message=message)

        # VALIDSIG <fpr> <date> <ts> <expire> <ver> <rsv> <pk-algo> <hash-algo> <class> <primary-fpr>
        validsig = status["VALIDSIG"]
        signer = normalize_fingerprint(validsig[0])
        primary = normalize_fingerprint(validsig[9]) if len(validsig) >= 10 else signer

        trusted = {normalize_fingerprint(f) for f in trusted_fingerprints}
        if signer in trusted:
            return VerificationOutcome(succeeded=True, signer_fingerprint=signer)
        if primary in trusted:
            return VerificationOutcome(succeeded=True, signer_fingerprint=primary)

        return VerificationOutcome(
            succeeded=False,
            signer_fingerprint=signer,
            status_message=f"Signature made by untrusted key {signer}",
        )
