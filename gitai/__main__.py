"""Allow running gitai with ``python -m gitai``."""

from gitai.cli import main

main()
