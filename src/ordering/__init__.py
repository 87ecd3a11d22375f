"""Ordering bounded context — shopping carts, checkout and order history."""
