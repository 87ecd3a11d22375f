"""Shared kernel: the entity store, configuration, logging and error types
used by every storefront bounded context."""
