"""Terminal music client core: command language, library models, play queue, events and configuration."""

__version__ = "0.1.0"