from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class CacheLevel(Enum):
    INSTRUCTION = "icache"
    DATA = "dcache"
    L2 = "l2cache"


class MemoryLevel(ABC):
    @abstractmethod
    def access(self, address: int) -> int:
        """Access `address` and return the latency in cycles."""
        pass


@dataclass
class MainMemory(MemoryLevel):
    """
    Terminal level below L2. Always hits at a fixed latency.
    """
    latency: int
    refs: int = 0

    def access(self, address: int) -> int:
        self.refs += 1
        return self.latency
