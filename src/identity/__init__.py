"""Identity bounded context — user accounts and profiles."""
