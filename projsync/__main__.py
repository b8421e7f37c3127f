"""
Main entry point for the projsync CLI.
"""

from projsync.cli import app


def main() -> None:
    """Main function for the projsync CLI."""
    app()


if __name__ == "__main__":
    main()
