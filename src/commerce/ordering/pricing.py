"""Checkout pricing — flat tax plus a free-shipping threshold.

The policy constants come from the ``[custom]`` section of ``domain.toml``.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain


@dataclass(frozen=True)
class PricingPolicy:
    tax_rate: float = 0.08
    free_shipping_threshold: float = 500.0
    flat_shipping_fee: float = 50.0

    @classmethod
    def from_domain(cls, domain=None) -> "PricingPolicy":
        domain = domain or current_domain
        return cls(
            tax_rate=float(getattr(domain, "TAX_RATE", cls.tax_rate)),
            free_shipping_threshold=float(getattr(domain, "FREE_SHIPPING_THRESHOLD", cls.free_shipping_threshold)),
            flat_shipping_fee=float(getattr(domain, "FLAT_SHIPPING_FEE", cls.flat_shipping_fee)),
        )


def price_order(items_price: float, policy: PricingPolicy | None = None) -> dict:
    """Return the frozen price breakdown for an order subtotal."""
    policy = policy or PricingPolicy.from_domain()

    tax_price = items_price * policy.tax_rate
    shipping_price = 0.0 if items_price > policy.free_shipping_threshold else policy.flat_shipping_fee
    return {
        "items_price": items_price,
        "tax_price": tax_price,
        "shipping_price": shipping_price,
        "total_price": items_price + tax_price + shipping_price,
    }
