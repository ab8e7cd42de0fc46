"""Build, validate, import and export PlexPurchases purchase configurations."""

__version__ = "0.1.0"
