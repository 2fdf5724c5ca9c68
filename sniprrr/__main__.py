"""Module entrypoint for ``python -m sniprrr``."""

from .cli import main


if __name__ == "__main__":
    main()
