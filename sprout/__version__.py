"""Version information for sprout."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sprout")
except PackageNotFoundError:
    # Fallback when running from source without installing
    __version__ = "0.0.0+unknown"
