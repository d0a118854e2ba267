"""PrintHelper - render receipts to PDF and deliver them to local printers."""

__version__ = "0.1.0"
