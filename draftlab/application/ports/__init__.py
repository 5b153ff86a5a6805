"""Application ports (interfaces)."""

from .analysis_service import AnalysisServicePort, ProgressCallbackPort
from .catalog_service import CatalogPort

__all__ = [
    "AnalysisServicePort",
    "CatalogPort",
    "ProgressCallbackPort",
]
