"""Module entrypoint for ``python -m lazyredis``."""

from .cli import main


if __name__ == "__main__":
    main()
