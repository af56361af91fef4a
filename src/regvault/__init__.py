"""RegVault - financial projections and regulatory capital for payment and e-money licences."""

# Core engine and components
from .core.config import EngineConfig
from .core.engine import DerivationResult, ProjectionEngine
from .core.exceptions import AccountingIdentityError, RegVaultError, UnknownLicenceTypeError
from .core.inputs import Assumptions, CostItem, ProjectionInputs, RevenueStream
from .core.statements import FinancialStatements

# Capital requirement
from .capital.requirement import CapitalRequirement, CapitalRequirementCalculator

# Sensitivity analysis
from .sensitivity.engine import SensitivityEngine, SensitivityScenario

# Full pipeline
from .pipeline import ProjectionPipeline, ProjectionResults, run_projection

# Supplementary analysis
from .analysis.validation import ProjectionValidation, validate_projections
from .analysis.breakeven import BreakEvenResult, calculate_break_even
from .templates import list_templates, load_template

__version__ = "0.1.0"
__author__ = "RegVault Contributors"

__all__ = [
    # Core components
    "EngineConfig",
    "DerivationResult",
    "ProjectionEngine",
    "AccountingIdentityError",
    "RegVaultError",
    "UnknownLicenceTypeError",
    "Assumptions",
    "CostItem",
    "ProjectionInputs",
    "RevenueStream",
    "FinancialStatements",

    # Capital
    "CapitalRequirement",
    "CapitalRequirementCalculator",

    # Sensitivity
    "SensitivityEngine",
    "SensitivityScenario",

    # Pipeline
    "ProjectionPipeline",
    "ProjectionResults",
    "run_projection",

    # Analysis
    "ProjectionValidation",
    "validate_projections",
    "BreakEvenResult",
    "calculate_break_even",
    "list_templates",
    "load_template",
]
