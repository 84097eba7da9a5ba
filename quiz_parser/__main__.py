"""
Module entry point for: python -m quiz_parser

Allows running the parser directly as a module:
    python -m quiz_parser parse <path> [options]
    python -m quiz_parser search <path> [query]
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
