"""Single source of truth for the yarn-ws version string."""

__version__: str = "0.3.1"
