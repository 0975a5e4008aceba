"""Allow ``python -m supermemory_sync``."""

from .cli import main

if __name__ == "__main__":
    main()
