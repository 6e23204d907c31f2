"""Utility functions for the XML/JSON converter."""

from .validation import ValidationUtils

__all__ = ["ValidationUtils"]
