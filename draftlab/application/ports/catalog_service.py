"""Port (interface) for the champion catalog."""

from abc import ABC, abstractmethod
from typing import List

from drafting.models import Entity


class CatalogPort(ABC):
    """Port for loading the read-only champion catalog."""

    @abstractmethod
    def load_entities(self) -> List[Entity]:
        """Load every selectable champion.

        Returns:
            Champions in display order
        """
        ...
