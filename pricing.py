import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

from config import DEFAULT_PRICE, DIMENSIONS, DISCOUNTS, PRICE_TIERS, RESULT_CLASSES
from utils import clean_price_input, parse_number

Price = Union[str, float, int]


# tier name -> attribute name
_TIER_FIELDS = {"full": "full", "diskon": "diskon", "super": "super_tier"}


@dataclass
class PriceDetail:
    full: Price = DEFAULT_PRICE
    diskon: Price = DEFAULT_PRICE
    super_tier: Price = DEFAULT_PRICE

    def get(self, tier: str) -> Price:
        if tier not in PRICE_TIERS:
            raise ValueError(f"unknown price tier: {tier!r}")
        return getattr(self, _TIER_FIELDS[tier])

    def set(self, tier: str, value: Price):
        if tier not in PRICE_TIERS:
            raise ValueError(f"unknown price tier: {tier!r}")
        setattr(self, _TIER_FIELDS[tier], clean_price_input(value) if isinstance(value, str) else value)


PriceTable = Dict[str, Dict[str, PriceDetail]]


def default_price_table() -> PriceTable:
    return {dim: {cls: PriceDetail() for cls in RESULT_CLASSES} for dim in DIMENSIONS}


def cost(qty: int, price: Price, discount: Optional[float] = None) -> float:
    # a missing or zero discount means no discount
    return round(qty * parse_number(price) * (discount or 1), 3)


@dataclass
class CostCalculator:
    prices: PriceTable = field(default_factory=default_price_table)
    discounts: Dict[str, Dict[str, float]] = field(default_factory=lambda: copy.deepcopy(DISCOUNTS))

    def discount(self, dim: str, tier: str) -> float:
        return self.discounts.get(dim, {}).get(tier) or 1

    def line_cost(self, filtered: Dict[str, Dict[str, List[str]]], dim: str, cls: str, tier: str,
                  selected_dims: Sequence[str] = DIMENSIONS) -> float:
        if dim not in selected_dims:
            return 0.0
        qty = len(filtered.get(dim, {}).get(cls, []))
        return cost(qty, self.prices[dim][cls].get(tier), self.discount(dim, tier))

    def cost_frame(self, filtered: Dict[str, Dict[str, List[str]]],
                   selected_dims: Sequence[str] = DIMENSIONS) -> pd.DataFrame:
        rows = []
        for dim in DIMENSIONS:
            for cls in RESULT_CLASSES:
                qty = len(filtered.get(dim, {}).get(cls, [])) if dim in selected_dims else 0
                for tier in PRICE_TIERS:
                    price = self.prices[dim][cls].get(tier)
                    rows.append({
                        "type": dim,
                        "class": cls,
                        "tier": tier,
                        "qty": qty,
                        "price": parse_number(price),
                        "discount": self.discount(dim, tier),
                        "cost": self.line_cost(filtered, dim, cls, tier, selected_dims),
                    })
        return pd.DataFrame(rows, columns=["type", "class", "tier", "qty", "price", "discount", "cost"])

    def totals(self, filtered: Dict[str, Dict[str, List[str]]],
               selected_dims: Sequence[str] = DIMENSIONS) -> Dict[str, float]:
        by_tier = self.cost_frame(filtered, selected_dims).groupby("tier")["cost"].sum()
        return {tier: round(float(by_tier.get(tier, 0.0)), 3) for tier in PRICE_TIERS}
