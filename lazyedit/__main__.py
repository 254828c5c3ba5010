"""Module entrypoint for ``python -m lazyedit``."""

from .cli import main


if __name__ == "__main__":
    main()
