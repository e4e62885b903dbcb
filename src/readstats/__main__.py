"""Main entry point for the readstats package."""

from readstats.cli import app


def main():
    """Run the readstats command line."""
    app()


if __name__ == "__main__":
    main()
