"""AI-assisted commit messages and code reviews for staged git changes."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("gitscribe")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
