"""Predefined what-if scenarios"""

import re
from typing import List

from finbot_forecast.domain.exceptions import ScenarioNotFoundError
from finbot_forecast.domain.models import PredefinedScenario, ScenarioParameters


def slugify_scenario_name(name: str) -> str:
    """'En Kötü Senaryo' -> 'en_kötü_senaryo'"""
    return re.sub(r"\s+", "_", name.lower())


def _parameters(income: str, expense: str, fixed: str, credit: str, months: int = 12) -> ScenarioParameters:
    return ScenarioParameters(
        income_multiplier=income,
        expense_multiplier=expense,
        fixed_expense_multiplier=fixed,
        credit_payment_multiplier=credit,
        months_to_project=months,
    )


def get_predefined_scenarios() -> List[PredefinedScenario]:
    """Fixed, ordered scenario catalog; a fresh list on every call"""
    return [
        PredefinedScenario(
            name="Gelir %10 Azalması",
            description="Gelirlerde %10 azalma durumunda finansal durum analizi",
            parameters=_parameters("0.9", "1.0", "1.0", "1.0"),
        ),
        PredefinedScenario(
            name="Gelir %20 Azalması",
            description="Gelirlerde %20 azalma durumunda finansal durum analizi",
            parameters=_parameters("0.8", "1.0", "1.0", "1.0"),
        ),
        PredefinedScenario(
            name="Giderler %15 Artması",
            description="Giderlerde %15 artış durumunda finansal durum analizi",
            parameters=_parameters("1.0", "1.15", "1.0", "1.0"),
        ),
        PredefinedScenario(
            name="Kredi Ödemeleri Artması",
            description="Kredi ödemelerinde %25 artış durumunda finansal durum analizi",
            parameters=_parameters("1.0", "1.0", "1.0", "1.25"),
        ),
        PredefinedScenario(
            name="En Kötü Senaryo",
            description="Gelir azalması ve gider artışı birlikte",
            parameters=_parameters("0.8", "1.2", "1.1", "1.3"),
        ),
        PredefinedScenario(
            name="En İyi Senaryo",
            description="Gelir artışı ve gider kontrolü",
            parameters=_parameters("1.15", "0.9", "0.95", "0.8"),
        ),
    ]


def find_scenario(name: str) -> PredefinedScenario:
    """Look up a catalog scenario by exact name or by its slug"""
    wanted = slugify_scenario_name(name.strip())
    for scenario in get_predefined_scenarios():
        if scenario.name == name or slugify_scenario_name(scenario.name) == wanted:
            return scenario
    raise ScenarioNotFoundError(f"Unknown scenario: {name}")
