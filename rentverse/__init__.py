"""Rentverse client core — booking lifecycle, validation, filters and formatting."""

__version__ = "0.1.0"
