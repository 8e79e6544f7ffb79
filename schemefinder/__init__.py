"""Locate government welfare schemes on myScheme for an Indian region.

The ``__init__`` stays light (no eager re-exports) so importing a single
submodule, e.g. the tree scanner, does not pull in FastAPI or requests.
"""

__all__ = [
    "main",
]


def main() -> None:
    """Programmatic entry point for the command line interface."""
    import sys

    from .cli import main as cli_main  # lazy import

    sys.exit(cli_main())
