"""
Domain models — Pydantic types for script generation.

All models are re-exported here for convenient access:

    from scriptgen.core.models import GenerationRequest, GeneratedScript
"""

from scriptgen.core.models.request import NAME_PATTERN, GenerationRequest
from scriptgen.core.models.template import GeneratedScript

__all__ = [
    "GeneratedScript",
    "GenerationRequest",
    "NAME_PATTERN",
]
