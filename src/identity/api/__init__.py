"""Identity domain API package."""
