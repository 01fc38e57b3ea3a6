from .refinement_client import (
    Empty,
    Refined,
    RefinementError,
    RefinementRequester,
    RefinementResult,
)

__all__ = ["Empty", "Refined", "RefinementError", "RefinementRequester", "RefinementResult"]
