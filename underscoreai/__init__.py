"""Describe a shell command in plain words, get the command back."""

__version__ = "0.1.0"
