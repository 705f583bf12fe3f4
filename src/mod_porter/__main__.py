"""
Modrinth Mod Porter - Entry point
Allows running the tool with `python -m mod_porter`.
"""

import sys

from mod_porter.cli import main


if __name__ == "__main__":
    sys.exit(main())
