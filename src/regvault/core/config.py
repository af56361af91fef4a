"""Configuration management for the projection and capital engine."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import yaml
from pydantic import BaseModel, Field

from .exceptions import UnknownLicenceTypeError
from .regulatory import BracketTable, LicenceParameters


class EngineConfig(BaseModel):
    """Engine configuration: licence table, bracket tables and defaults."""

    capital: Dict[str, Any] = Field(default_factory=dict)
    licences: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    brackets: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    estimation: Dict[str, Any] = Field(default_factory=dict)
    sensitivity: Dict[str, Any] = Field(default_factory=dict)
    validation: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def load_default(cls) -> "EngineConfig":
        """Load default configuration from package yaml file."""
        config_path = Path(__file__).parent.parent / "config.yaml"
        return cls.load_from_file(config_path)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "EngineConfig":
        """Load configuration from YAML file."""
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
        return cls(**(config_data or {}))

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, indent=2)

    def list_licence_types(self) -> List[str]:
        """List licence types present in the parameter table."""
        return list(self.licences.keys())

    def get_licence(self, licence_type: Any) -> LicenceParameters:
        """Get parameters for a licence type; unknown types are a hard failure."""
        if isinstance(licence_type, LicenceParameters):
            return licence_type
        key = getattr(licence_type, "value", licence_type)
        if key not in self.licences:
            raise UnknownLicenceTypeError(str(key), self.list_licence_types())
        return LicenceParameters(licence_type=key, **self.licences[key])

    def get_bracket_table(self, name: str) -> BracketTable:
        """Get a sliding-scale bracket table (e.g. ``method_b``)."""
        if name not in self.brackets:
            raise ValueError(f"No bracket table configured for {name}")
        return BracketTable(**self.brackets[name])

    def get_capital_parameter(self, name: str, default: float) -> float:
        """Get a capital parameter such as ``method_a_rate``."""
        return float(self.capital.get(name, default))

    def get_regulation_version(self) -> Optional[str]:
        return self.capital.get("regulation_version")

    def get_estimate(self, name: str, default: Any) -> Any:
        """Get an estimation default used when an optional input is absent."""
        return self.estimation.get(name, default)

    def get_scenario_multipliers(self) -> Dict[str, Tuple[float, float]]:
        """Get (revenue, cost) multipliers per sensitivity scenario."""
        scenarios = self.sensitivity.get("scenarios", {})
        return {
            name: (float(params.get("revenue_multiplier", 1.0)), float(params.get("cost_multiplier", 1.0)))
            for name, params in scenarios.items()
        }

    def get_validation_threshold(self, name: str, default: float) -> float:
        """Get a validation threshold."""
        return float(self.validation.get(name, default))
