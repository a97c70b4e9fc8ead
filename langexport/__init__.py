"""langexport: export localization workbooks into per-language JSON archives."""

__version__ = "0.1.0"
