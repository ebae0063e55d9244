from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from core.cards import stat_card
from core.derive import derive_household
from core.formatting import format_full_currency, format_share
from core.models import FamilyData, HouseholdEntity


def compute_household(entity: HouseholdEntity) -> Dict[str, Any]:
    metrics = derive_household(entity)
    return {
        "entity": entity.name,
        "cards": [
            stat_card("Total Assets", entity.total_assets_usd, format_full_currency(entity.total_assets_usd)),
            stat_card("Total Liabilities", entity.total_liabilities_usd),
            stat_card("Net Worth", entity.net_assets_usd, format_full_currency(entity.net_assets_usd)),
            stat_card("Liquid Assets", entity.liquid_assets_usd, f"{format_share(metrics.liquid_share)} of total"),
        ],
        "metrics": asdict(metrics),
        "illiquid_assets": entity.illiquid_assets_usd,
        "defaulted_fields": list(entity.defaulted_fields),
    }


def compute_family(data: FamilyData) -> Dict[str, Any]:
    members = [data.nick, data.mom, data.poppy]
    return {
        "mom": compute_household(data.mom),
        "poppy": compute_household(data.poppy),
        "combined": {
            "total_assets_usd": float(sum(m.total_assets_usd for m in members)),
            "total_liabilities_usd": float(sum(m.total_liabilities_usd for m in members)),
            "net_assets_usd": float(sum(m.net_assets_usd for m in members)),
        },
    }
