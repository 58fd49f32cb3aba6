"""Candidate validation status tracking."""

__version__ = "0.1.0"
