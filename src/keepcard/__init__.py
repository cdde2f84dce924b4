"""Keep-card generator: stock report export -> printable keep-quantity cards."""

__version__ = "0.1.0"
