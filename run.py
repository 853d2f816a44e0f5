"""Entry point for the contindex command line."""

from contindex.cli import app


def main() -> None:
    """Run the contindex CLI."""
    app(prog_name="contindex")


if __name__ == "__main__":
    main()
