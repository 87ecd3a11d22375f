"""Ordering domain API package."""
