"""Main entry point for ``python -m lxcforge``."""

from lxcforge.cli.main import main


if __name__ == "__main__":
    main()
