"""Catalogue bounded context — products, categories and read-side queries."""
