"""Adapter loading the champion catalog from a JSON file."""

import os
from pathlib import Path
from typing import List

from drafting.catalog import load_catalog
from drafting.models import Entity

from ...application.ports.catalog_service import CatalogPort


class JsonCatalogAdapter(CatalogPort):
    """Adapter for reading champion records from a JSON file."""

    def __init__(self, path: str | Path | None = None):
        """Initialize with catalog path.

        Args:
            path: Catalog JSON path. If None, will try to get from environment.
        """
        self._path = path or os.environ.get("DRAFTING_CATALOG", "")

    def load_entities(self) -> List[Entity]:
        """Load champions from the configured JSON file.

        Returns:
            Parsed champions in file order
        """
        if not self._path:
            raise ValueError("DRAFTING_CATALOG not configured")
        return load_catalog(self._path)
