"""Download command"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from sigfetch.cli.formatters import format_artifact
from sigfetch.config import Config
from sigfetch.core.version import is_valid_version
from sigfetch.data.models import ArtifactLocator, Digest
from sigfetch.downloader import Downloader
from sigfetch.exceptions import ChecksumMismatch, DownloadError, RetrievalFailed, VerificationFailed
from sigfetch.interfaces import Transport
from sigfetch.registry import ConfigFingerprintRegistry
from sigfetch.transport import HttpTransport
from sigfetch.utils.logging import setup_logging
from sigfetch.utils.network import HTTPClient
from sigfetch.verifier.checksum import HashChecksumService
from sigfetch.verifier.gpg import GPGSignatureVerifier

console = Console()


def build_downloader(config: Config, transport: Transport, trust: list[str] | None = None) -> Downloader:
    """Wire the default collaborators from configuration"""
    verifier = GPGSignatureVerifier(
        gpg_binary=config.get("verification", "gpg_binary", "gpg"),
        home_dir=config.get("verification", "gpg_home") or None,
        timeout=config.get("verification", "gpg_timeout", 30),
    )
    registry = ConfigFingerprintRegistry(config_path=config.config_path, extra=trust or [])
    return Downloader(transport, verifier, HashChecksumService(), registry)


def download(
    name: str = typer.Argument(..., help="Artifact name"),
    version: str = typer.Argument(..., help="Release version"),
    artifact_url: str = typer.Argument(..., help="URL of the artifact"),
    signature_url: Optional[str] = typer.Option(
        None, "--signature-url", "-s", help="URL of the detached signature (default: ARTIFACT_URL.asc)"
    ),
    digest: Optional[str] = typer.Option(None, "--digest", "-d", help="Pinned digest as ALGORITHM:HEX"),
    trust: Optional[List[str]] = typer.Option(None, "--trust", "-t", help="Additional trusted fingerprint"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory to save the artifact in"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table, json"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Download and verify a signed release artifact"""
    config = Config(config_path=config_path)
    setup_logging(level=config.get("general", "log_level", "INFO"), verbose=verbose)

    if not is_valid_version(version):
        console.print(f"[red]Error:[/red] Invalid version '{escape(version)}'")
        raise typer.Exit(1)

    try:
        locator = ArtifactLocator(
            name=name,
            version=version,
            artifact_url=artifact_url,
            signature_url=signature_url or f"{artifact_url}.asc",
            expected_digest=Digest.parse(digest) if digest else None,
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    client = HTTPClient(
        rate_limit=config.get("network", "rate_limit", 60),
        time_window=config.get("network", "time_window", 60.0),
        timeout=config.get("network", "timeout", 30.0),
        max_retries=config.get("network", "max_retries", 3),
    )
    with HttpTransport(client) as transport:
        downloader = build_downloader(config, transport, trust)
        try:
            artifact = downloader.download(locator)
        except RetrievalFailed as e:
            console.print(f"[red]Error:[/red] could not retrieve {escape(e.url)}")
            raise typer.Exit(1)
        except VerificationFailed as e:
            console.print(f"[red]Error:[/red] signature verification failed: {escape(e.status_message)}")
            raise typer.Exit(1)
        except ChecksumMismatch as e:
            console.print(f"[red]Error:[/red] checksum mismatch, expected {e.expected} but got {e.actual}")
            raise typer.Exit(1)
        except DownloadError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)

    saved_to = artifact.content.save(output or Path(config.get("general", "output_dir", ".")))
    format_artifact(artifact, output_format, console, saved_to=saved_to)
