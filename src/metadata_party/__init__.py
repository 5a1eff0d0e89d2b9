"""Metadata Party - SSRF-safe link preview metadata extraction."""

__version__ = "0.1.0"
