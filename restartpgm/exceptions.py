class InvalidConfiguration(ValueError):
    """Raised when a search is configured with values it cannot run with."""


class StructuralInvariantViolation(ValueError):
    """Raised when an arc insertion would break acyclicity, the parent bound or parent set uniqueness."""
