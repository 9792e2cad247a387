# ABOUTME: Structured data extraction from parsed wiki pages
# ABOUTME: Pipeline Stage 1: document tree → typed record or per-field error report

"""
Extraction Layer: Turn wiki markup into typed records

This layer handles:
- Per-field extractors (anchor query → navigation → attribute/text read)
- Closed-set parsers from raw strings to domain enums
- Record assembly with per-field error aggregation

Data Flow: fetch/ documents → Typed records or error reports → core/ service
"""

from .assembler import ErrorReport, assemble, build_record
from .nikke import extract_nikke, extract_nikke_list

__all__ = [
    "ErrorReport",
    "assemble",
    "build_record",
    "extract_nikke",
    "extract_nikke_list",
]
