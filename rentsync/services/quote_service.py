"""
Calcolo preventivi / Quote pricing.
"""

import math
from datetime import date

from rentsync.config import settings

# (giorni minimi, sconto) dal piu lungo / (minimum days, discount) longest first
DISCOUNT_TIERS = [(30, 0.25), (14, 0.15), (7, 0.10)]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class QuoteService:
    """Durata, sconti e IVA di un preventivo / Duration, discounts and VAT of a quote."""

    @staticmethod
    def rental_days(start: str | date | None, end: str | date | None) -> int:
        """Giorni fatturati, minimo 1 / Billed days, at least 1."""
        if not start or not end:
            return 1
        start_d = date.fromisoformat(start) if isinstance(start, str) else start
        end_d = date.fromisoformat(end) if isinstance(end, str) else end
        return max(1, math.ceil((end_d - start_d).days))

    @staticmethod
    def dynamic_discount_rate(days: int) -> float:
        for min_days, rate in DISCOUNT_TIERS:
            if days >= min_days:
                return rate
        return 0.0

    @staticmethod
    def rental_total(price_per_day: float, start: str | None, end: str | None) -> float:
        """Importo contratto per noleggi diretti / Contract amount for direct rentals."""
        return price_per_day * QuoteService.rental_days(start, end)

    @staticmethod
    def preview(
        price_per_day: float,
        start: str | None,
        end: str | None,
        dynamic_discount: bool = False,
        manual_discount: float = 0.0,
    ) -> dict:
        days = QuoteService.rental_days(start, end)
        base_total = price_per_day * days
        if dynamic_discount:
            discount = float(_round_half_up(base_total * QuoteService.dynamic_discount_rate(days)))
        else:
            discount = float(manual_discount)
        final_total = max(0.0, base_total - discount)
        vat = final_total * settings.VAT_RATE
        return {
            "days": days,
            "base_total": round(base_total, 2),
            "discount": discount,
            "final_total": round(final_total, 2),
            "vat": round(vat, 2),
            "grand_total": round(final_total + vat, 2),
        }
