# ABOUTME: Core domain types and the update orchestration service
# ABOUTME: Result type, record models, daily selection; the service lives in core.service

"""
Core Layer: Domain types and orchestration

This layer provides:
- The Ok/Err result type used by every extraction step
- Integer enums and Pydantic models for character records
- Seeded daily selection
- The incremental update service (imported from ``nikkedex.core.service``)

Data Flow: extraction/ records → core/ service → persistence/ store
"""

from .daily import DailyRandom, seed_for_today
from .models import ExtractedNikke, Nikke, NikkeListEntry
from .result import Err, Ok, Result, UnwrapError

__all__ = [
    "DailyRandom",
    "Err",
    "ExtractedNikke",
    "Nikke",
    "NikkeListEntry",
    "Ok",
    "Result",
    "UnwrapError",
    "seed_for_today",
]
