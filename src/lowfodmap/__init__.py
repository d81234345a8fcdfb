"""Low-FODMAP meal composition and weekly plan balancing."""

__version__ = "0.1.0"
