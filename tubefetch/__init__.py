"""Fetch recent YouTube videos for a search query, store them in SQLite and serve them over a paginated JSON API."""

__version__ = "1.0.0"