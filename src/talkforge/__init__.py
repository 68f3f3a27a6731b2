"""TalkForge - conference talk ideas from a LinkedIn profile export."""

__version__ = "0.1.0"
