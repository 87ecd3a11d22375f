"""Runtime settings for the storefront, read from the environment."""

import os

from protean.exceptions import ConfigurationError


def get_environment() -> str:
    """Return the active environment name (development, test, staging, production)."""
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or "development").lower()


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def _flag_from_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Checkout pricing knobs and process-level switches.

    Constructed once at start-up and handed to the services that need it.
    """

    def __init__(
        self,
        tax_rate: float = 0.08,
        free_shipping_threshold: float = 50.0,
        standard_shipping: float = 5.99,
        express_shipping: float = 12.99,
        seed_catalogue: bool = True,
        environment: str = "development",
    ):
        if not 0 <= tax_rate < 1:
            raise ConfigurationError(f"Tax rate must be within [0, 1), got {tax_rate}")
        if min(free_shipping_threshold, standard_shipping, express_shipping) < 0:
            raise ConfigurationError("Shipping amounts cannot be negative")

        self.tax_rate = tax_rate
        self.free_shipping_threshold = free_shipping_threshold
        self.standard_shipping = standard_shipping
        self.express_shipping = express_shipping
        self.seed_catalogue = seed_catalogue
        self.environment = environment

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            tax_rate=_float_from_env("STOREFRONT_TAX_RATE", 0.08),
            free_shipping_threshold=_float_from_env("STOREFRONT_FREE_SHIPPING_THRESHOLD", 50.0),
            standard_shipping=_float_from_env("STOREFRONT_STANDARD_SHIPPING", 5.99),
            express_shipping=_float_from_env("STOREFRONT_EXPRESS_SHIPPING", 12.99),
            seed_catalogue=_flag_from_env("STOREFRONT_SEED", True),
            environment=get_environment(),
        )

    def __repr__(self) -> str:
        return (
            f"Settings(tax_rate={self.tax_rate}, free_shipping_threshold={self.free_shipping_threshold}, "
            f"standard_shipping={self.standard_shipping}, express_shipping={self.express_shipping}, "
            f"seed_catalogue={self.seed_catalogue}, environment={self.environment!r})"
        )
