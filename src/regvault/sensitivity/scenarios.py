"""Sensitivity scenario definitions."""

from typing import Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, Field

from ..core.config import EngineConfig


class ScenarioName(str, Enum):
    """Scenarios run by the sensitivity engine, in reporting order."""

    PESSIMISTIC = "pessimistic"
    BASE = "base"
    OPTIMISTIC = "optimistic"


class ScenarioDefinition(BaseModel):
    """Multiplicative perturbation applied to revenue and cost inputs."""

    name: ScenarioName
    revenue_multiplier: float = Field(ge=0, description="Applied to every stream base value")
    cost_multiplier: float = Field(ge=0, description="Applied to every cost item amount")
    description: Optional[str] = None


# Used when the configuration does not define a scenario
DEFAULT_MULTIPLIERS = {
    ScenarioName.PESSIMISTIC: (0.7, 1.2),
    ScenarioName.BASE: (1.0, 1.0),
    ScenarioName.OPTIMISTIC: (1.3, 0.9),
}


def get_scenario_definitions(config: Optional[EngineConfig] = None) -> List[ScenarioDefinition]:
    """Scenario definitions from configuration, falling back to the defaults."""
    configured = config.get_scenario_multipliers() if config else {}

    definitions = []
    for name in ScenarioName:
        revenue_multiplier, cost_multiplier = configured.get(name.value, DEFAULT_MULTIPLIERS[name])
        definitions.append(ScenarioDefinition(
            name=name,
            revenue_multiplier=revenue_multiplier,
            cost_multiplier=cost_multiplier,
            description=f"Revenue x{revenue_multiplier:g}, costs x{cost_multiplier:g}",
        ))
    return definitions


def get_scenario(scenario_name: str, config: Optional[EngineConfig] = None) -> ScenarioDefinition:
    """Get a scenario definition by name."""
    definitions: Dict[str, ScenarioDefinition] = {d.name.value: d for d in get_scenario_definitions(config)}
    key = getattr(scenario_name, "value", scenario_name)
    if key in definitions:
        return definitions[key]
    raise ValueError(f"Unknown scenario: {scenario_name}. Available: {list(definitions.keys())}")


def list_available_scenarios() -> List[str]:
    """List all scenario names."""
    return [name.value for name in ScenarioName]
