"""Value types passed through the download pipeline"""

import re
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from packaging.version import Version
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from sigfetch.core.version import parse_version
from sigfetch.utils.hashing import HASH_ALGORITHMS

_HEX = re.compile(r"^[0-9a-f]+$")


def safe_filename(text: str) -> str:
    """Reduce text to a bare file name, rejecting names that resolve to a directory"""
    name = PurePosixPath(text.replace("\\", "/")).name
    if name in ("", ".", ".."):
        raise ValueError(f"Cannot derive a file name from '{text}'")
    return name


def _artifact_filename(url: str, fallback: str) -> str:
    path = urlparse(url).path
    if not PurePosixPath(path).name:
        return safe_filename(fallback)
    return safe_filename(path)


class Digest(BaseModel):
    """Expected or computed content digest"""

    model_config = ConfigDict(frozen=True)

    algorithm: str
    value: str

    @field_validator("algorithm")
    @classmethod
    def _check_algorithm(cls, v: str) -> str:
        v = v.lower()
        if v not in HASH_ALGORITHMS:
            raise ValueError(f"Unsupported hash algorithm: {v}")
        return v

    @field_validator("value")
    @classmethod
    def _check_value(cls, v: str) -> str:
        v = v.strip().lower()
        if not _HEX.match(v):
            raise ValueError("Digest value must be a hex string")
        return v

    @classmethod
    def parse(cls, text: str) -> "Digest":
        """Build a digest from its ``algorithm:hex`` form"""
        algorithm, sep, value = text.partition(":")
        if not sep:
            raise ValueError(f"Invalid digest '{text}', expected ALGORITHM:HEX")
        return cls(algorithm=algorithm, value=value)

    def __str__(self) -> str:
        return f"{self.algorithm}:{self.value}"


class ArtifactLocator(BaseModel):
    """Where to find a release artifact and its detached signature"""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    version: Version
    artifact_url: str
    signature_url: str
    expected_digest: Digest | None = None

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, v: Version | str) -> Version:
        return v if isinstance(v, Version) else parse_version(v)

    @model_validator(mode="after")
    def _check_filename(self) -> "ArtifactLocator":
        _artifact_filename(self.artifact_url, self.name)
        return self

    @property
    def artifact_filename(self) -> str:
        """Last path segment of the artifact URL, falling back to the artifact name"""
        return _artifact_filename(self.artifact_url, self.name)


class FetchResult(BaseModel):
    """Outcome of a single transport fetch"""

    model_config = ConfigDict(frozen=True)

    succeeded: bool
    body: bytes = b""
    status_code: int | None = None


class VerificationOutcome(BaseModel):
    """Result reported by a signature verifier"""

    model_config = ConfigDict(frozen=True)

    succeeded: bool
    signer_fingerprint: str = ""
    # Only meaningful when verification failed
    status_message: str = ""


class ArtifactFile(BaseModel):
    """Named in-memory file"""

    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes

    @field_validator("filename")
    @classmethod
    def _check_filename(cls, v: str) -> str:
        if safe_filename(v) != v:
            raise ValueError(f"File name must not contain a path: '{v}'")
        return v

    def save(self, directory: Path | str) -> Path:
        """Write the content into a directory and return the written path"""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / self.filename
        target.write_bytes(self.content)
        return target


class VerifiedArtifact(BaseModel):
    """An artifact whose signature (and pinned digest, if any) checked out"""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    version: Version
    content: ArtifactFile
    signer_fingerprint: str

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, v: Version | str) -> Version:
        return v if isinstance(v, Version) else parse_version(v)

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"
