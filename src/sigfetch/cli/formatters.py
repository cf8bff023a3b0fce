"""Output formatters"""

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from sigfetch.data.models import VerifiedArtifact
from sigfetch.utils.hashing import hash_bytes


def artifact_summary(artifact: VerifiedArtifact, saved_to: Path | None = None) -> dict[str, str | int | None]:
    """Plain-data summary of a verified artifact"""
    return {
        "name": artifact.name,
        "version": str(artifact.version),
        "file": artifact.content.filename,
        "size": len(artifact.content.content),
        "sha256": hash_bytes(artifact.content.content, "sha256"),
        "signer_fingerprint": artifact.signer_fingerprint,
        "saved_to": str(saved_to) if saved_to else None,
    }


def format_artifact(
    artifact: VerifiedArtifact,
    output_format: str = "table",
    console: Console | None = None,
    saved_to: Path | None = None,
) -> None:
    """Print a verified artifact in the requested format"""
    console = console or Console()
    summary = artifact_summary(artifact, saved_to)

    if output_format == "json":
        console.print_json(json.dumps(summary))
        return

    table = Table(title=f"Verified {artifact.name} {artifact.version}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in summary.items():
        if value is None:
            continue
        table.add_row(key.replace("_", " ").title(), str(value))
    console.print(table)
