"""AI commit message generator for git working trees."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("gitai")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
