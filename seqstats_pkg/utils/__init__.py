"""Utility modules: formats, file handling, settings and statistics engines."""
