from __future__ import annotations

# python -m schemefinder
from . import main


if __name__ == "__main__":
    main()
