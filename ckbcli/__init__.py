"""Argument parsing, YAML and JSON rendering, settings and completion for a CKB command-line client."""

__version__ = "0.1.0"