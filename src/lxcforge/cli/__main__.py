"""CLI entry point."""

from lxcforge.cli.main import app


def main():
    """Run the lxcforge CLI."""
    app()


if __name__ == "__main__":
    main()
