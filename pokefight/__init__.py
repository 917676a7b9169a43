"""Turn-based double battle game: HTTP lobby and command-exchange server, client helpers and screen layout."""

__version__ = "0.1.0"