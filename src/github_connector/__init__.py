"""GitHub Connector - recent commit activity for a GitHub user or organization."""

__version__ = "0.1.0"
