"""Allow ``python -m flowmatch``."""

from flowmatch.cli import main

if __name__ == "__main__":
    main()
