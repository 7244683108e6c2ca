"""Bundled Markdown templates, read as package data."""
