"""Presentation helpers: text formatting and chart images."""
