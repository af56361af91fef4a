"""Full projection pipeline: base derivation plus sensitivity scenarios."""

from collections import OrderedDict
from typing import Any, Dict, List, Optional
import logging
from pydantic import BaseModel, Field

from .core.config import EngineConfig
from .core.engine import ProjectionEngine
from .core.inputs import ProjectionInputs
from .core.statements import FinancialStatements
from .capital.requirement import CapitalRequirement
from .sensitivity.engine import SensitivityEngine, SensitivityScenario

logger = logging.getLogger(__name__)


class ProjectionResults(BaseModel):
    """Statements, capital requirement, adequacy and scenarios for one input set."""

    statements: FinancialStatements
    capital_requirement: CapitalRequirement
    capital_adequacy: List[bool]
    scenarios: List[SensitivityScenario] = Field(description="Pessimistic, base, optimistic")
    fingerprint: str

    def get_scenario(self, name: Any) -> Optional[SensitivityScenario]:
        key = getattr(name, "value", name)
        for scenario in self.scenarios:
            if scenario.name.value == key:
                return scenario
        return None

    def meets_minimum_requirements(self) -> bool:
        return all(self.capital_adequacy)

    def get_summary_metrics(self) -> Dict[str, Any]:
        """Get summary of key metrics."""
        return {
            "statements": self.statements.get_summary_metrics(),
            "capital": self.capital_requirement.get_summary(),
            "compliance": {
                "capital_adequacy": self.capital_adequacy,
                "meets_minimums": self.meets_minimum_requirements(),
            },
            "scenarios": {
                s.name.value: {
                    "net_profit": [p.net_profit for p in s.projections.pnl],
                    "capital_adequacy": s.capital_adequacy,
                }
                for s in self.scenarios
            },
        }


class ProjectionPipeline:
    """Single entry point; results are cached per input fingerprint.

    Only the most recent `max_cached` input sets are kept, so editing the
    inputs evicts the stale result. Callers always receive a copy.
    """

    def __init__(self, config: Optional[EngineConfig] = None, max_workers: Optional[int] = None,
                 max_cached: int = 1):
        if max_cached < 1:
            raise ValueError(f"max_cached must be at least 1, got {max_cached}")
        self.config = config or EngineConfig.load_default()
        self.engine = ProjectionEngine(self.config)
        self.sensitivity = SensitivityEngine(self.engine, max_workers=max_workers)
        self.max_cached = max_cached
        self._cache: "OrderedDict[str, ProjectionResults]" = OrderedDict()

    def run(self, inputs: ProjectionInputs) -> ProjectionResults:
        """Derive the base projections and all sensitivity scenarios."""
        fingerprint = inputs.fingerprint()
        cached = self._cache.get(fingerprint)
        if cached is not None:
            logger.debug(f"Returning cached projections for {fingerprint[:12]}")
            self._cache.move_to_end(fingerprint)
            return cached.model_copy(deep=True)

        base = self.engine.derive(inputs)
        scenarios = self.sensitivity.run_all(inputs)

        results = ProjectionResults(
            statements=base.statements,
            capital_requirement=base.capital_requirement,
            capital_adequacy=base.capital_adequacy,
            scenarios=scenarios,
            fingerprint=fingerprint,
        )
        self._cache[fingerprint] = results
        while len(self._cache) > self.max_cached:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug(f"Evicted cached projections for {evicted[:12]}")

        failing = [s.name.value for s in scenarios if not s.is_adequate_throughout()]
        logger.info(
            f"Projection run complete: {len(scenarios)} scenarios, "
            f"inadequate under {failing if failing else 'none'}"
        )
        return results.model_copy(deep=True)

    def invalidate(self, inputs: ProjectionInputs) -> bool:
        """Drop the cached result for these inputs; True if one was cached."""
        return self._cache.pop(inputs.fingerprint(), None) is not None

    def clear_cache(self) -> None:
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)


def run_projection(inputs: ProjectionInputs, config: Optional[EngineConfig] = None) -> ProjectionResults:
    """Run the pipeline once without keeping a cache."""
    return ProjectionPipeline(config).run(inputs)

