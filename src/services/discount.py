"""
Seuil de remise dynamique et detection des bonnes affaires.

Le pourcentage de remise exige est interpole lineairement dans l'espace
log(prix): max_percent a base_price (ou en dessous), min_percent a
max_price (ou au dessus). Plus un objet est cher, plus la remise relative
exigee est faible.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from src.core.entities.market import DynamicConstants, Listing


def calculate_dynamic_required_percent(
    ref_price_usd: float, constants: DynamicConstants
) -> float:
    """
    Remise minimale exigee (fraction) pour un prix de reference.

    Args:
        ref_price_usd: Prix de reference en dollars
        constants: Parametres de la courbe

    Returns:
        Fraction entre min_percent et max_percent
    """
    low_log = math.log(max(1.0, constants.base_price))
    high_log = math.log(max(constants.base_price + 1.0, constants.max_price))
    cur_log = math.log(max(constants.base_price, ref_price_usd))

    t = 0.0
    if high_log != low_log:
        t = (cur_log - low_log) / (high_log - low_log)
    t = max(0.0, min(1.0, t))

    return constants.max_percent - (constants.max_percent - constants.min_percent) * t


@dataclass
class DealEvaluation:
    """Evaluation d'un listing par rapport a son prix de reference (dollars)."""

    listing: Listing
    reference_usd: float
    price_usd: float
    discount_abs: float
    discount_pct: float
    required_pct: float
    is_deal: bool


def evaluate_listing(
    listing: Listing,
    constants: DynamicConstants,
    min_discount_abs: float = 0.0,
) -> Optional[DealEvaluation]:
    """
    Compare le prix d'un listing a son prix de reference.

    Args:
        listing: Listing (prix en centimes)
        constants: Parametres de la courbe de remise
        min_discount_abs: Remise minimale en dollars

    Returns:
        DealEvaluation, ou None si le listing n'a pas de prix de reference
    """
    reference_cents = listing.reference_price
    if not reference_cents:
        return None

    reference_usd = reference_cents / 100
    price_usd = listing.price / 100
    discount_abs = reference_usd - price_usd
    discount_pct = discount_abs / reference_usd
    required_pct = calculate_dynamic_required_percent(reference_usd, constants)

    return DealEvaluation(
        listing=listing,
        reference_usd=reference_usd,
        price_usd=price_usd,
        discount_abs=discount_abs,
        discount_pct=discount_pct,
        required_pct=required_pct,
        is_deal=discount_pct >= required_pct and discount_abs >= min_discount_abs,
    )


def find_deals(
    listings: Iterable[dict[str, Any]],
    constants: DynamicConstants,
    min_discount_abs: float = 0.0,
) -> list[DealEvaluation]:
    """Listings dont la remise depasse le seuil dynamique et le minimum absolu."""
    deals = []
    for raw in listings:
        evaluation = evaluate_listing(Listing(raw), constants, min_discount_abs)
        if evaluation is not None and evaluation.is_deal:
            deals.append(evaluation)
    return deals
