"""Keyboard focus-order and visual-feedback auditing for web pages."""

from .pipeline import FocusAuditor  # re-export for convenience

__all__ = ["FocusAuditor"]
