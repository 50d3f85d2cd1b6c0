"""bkp - manifest driven personal backup runner."""

__version__ = "0.1.0"
