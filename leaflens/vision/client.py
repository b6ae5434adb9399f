"""VisionClient — abstract base for image analysis backends."""
from abc import ABC, abstractmethod

from leaflens.models import BinaryAsset


class VisionClient(ABC):
    @abstractmethod
    async def analyze(self, asset: BinaryAsset, instruction: str | None = None) -> str:
        """Analyze the asset and return the analysis text. Raises LeafLensError on failure."""
        ...
