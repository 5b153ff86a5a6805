"""Infrastructure adapters."""

from .http_analysis_adapter import HttpAnalysisAdapter
from .json_catalog_adapter import JsonCatalogAdapter

__all__ = [
    "HttpAnalysisAdapter",
    "JsonCatalogAdapter",
]
