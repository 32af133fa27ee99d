"""Services for fitcoach."""

from .generation import GenerationService, create_generation_service
from .readiness import ReadinessService, score_readiness

__all__ = [
    "create_generation_service",
    "GenerationService",
    "ReadinessService",
    "score_readiness",
]
