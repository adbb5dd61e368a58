"""Error types raised at the pantry planner boundaries."""


class PantryPlannerError(Exception):
    """Base class for pantry planner errors."""


class ParseInputError(PantryPlannerError, ValueError):
    """Raised when free text handed to the stock parser is rejected."""


class ModelResponseError(PantryPlannerError, RuntimeError):
    """Raised when the text model returns nothing usable."""
