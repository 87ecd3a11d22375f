"""Checkout: turns a priced cart into a persisted order."""
