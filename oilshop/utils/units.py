# Myanmar weight units: 1 viss = 100 ticals (kyat thar), 1 viss ~ 1.633 kg
TICALS_PER_VISS = 100
KG_PER_VISS = 1.633
QUANTITY_PRECISION = 3
AMOUNT_PRECISION = 2


def ticals_to_viss(ticals: float) -> float:
    return round(float(ticals) / TICALS_PER_VISS, QUANTITY_PRECISION)


def viss_to_ticals(viss: float) -> float:
    return round(float(viss) * TICALS_PER_VISS, QUANTITY_PRECISION)


def line_amount(price_per_unit: float, quantity_viss: float) -> float:
    """Price of ``quantity_viss`` at a per-viss price."""
    return round(float(price_per_unit) * float(quantity_viss), AMOUNT_PRECISION)


def mix_total(lines: list[tuple[float, float]]) -> tuple[float, float]:
    """
    Totals of a mix given ``(price_per_unit, ticals)`` pairs.

    Returns ``(total_viss, total_amount)``; the amount is the sum of the
    per-line amounts, so it equals the weighted average price times weight.
    """
    total_ticals = sum(float(t) for _, t in lines)
    total_amount = sum(line_amount(p, float(t) / TICALS_PER_VISS) for p, t in lines)
    return ticals_to_viss(total_ticals), round(total_amount, AMOUNT_PRECISION)
