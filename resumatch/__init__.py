"""Résumé-driven job matching and interview preparation backed by Gemini."""

__version__ = "0.1.0"
