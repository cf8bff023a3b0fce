"""CLI entry point"""

import typer

from sigfetch.cli.commands import config, download

app = typer.Typer(
    name="sigfetch",
    help="sigfetch: download release artifacts and verify their signatures",
    no_args_is_help=True,
)

app.command(name="download")(download.download)
app.add_typer(config.app, name="config")


def main() -> None:
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
