"""Note models: plain and XML notes, a tag store and a formatting text buffer."""

__version__ = "0.1.0"