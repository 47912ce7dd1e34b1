"""NirmaanTech Portal - lead management and storefront core."""

__version__ = "1.0.0"
