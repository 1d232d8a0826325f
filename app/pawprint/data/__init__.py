"""Bundled data files for pawprint."""
