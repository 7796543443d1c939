"""Base formatter interface for hotspot output rendering."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..hotspots.models import Hotspot


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format(self, hotspots: Sequence[Hotspot]) -> str:
        """Return formatted string representation of hotspots."""
