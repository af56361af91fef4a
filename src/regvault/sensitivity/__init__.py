"""Sensitivity analysis under revenue/cost perturbations."""

from .scenarios import ScenarioDefinition, ScenarioName, get_scenario, get_scenario_definitions, list_available_scenarios
from .engine import SensitivityEngine, SensitivityScenario

__all__ = [
    "ScenarioDefinition",
    "ScenarioName",
    "SensitivityEngine",
    "SensitivityScenario",
    "get_scenario",
    "get_scenario_definitions",
    "list_available_scenarios",
]
