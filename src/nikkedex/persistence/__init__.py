# ABOUTME: Record storage layer
# ABOUTME: Pipeline Stage 2: typed records → JSON array file with case-insensitive dedup

"""
Persistence Layer: Save and retrieve character records

This layer handles:
- Loading the existing record file so incremental runs skip known names
- Sorted, indented JSON output of final records

Data Flow: core/ service records → JSON file → static site
"""

from .store import NikkeStore, StoreError

__all__ = [
    "NikkeStore",
    "StoreError",
]
