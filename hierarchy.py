from dataclasses import dataclass, field
from cache import Cache, CacheStats, InvalidGeometryError
from memory_level import CacheLevel, MainMemory
from constants import (
    DEFAULT_ICACHE_SETS,
    DEFAULT_ICACHE_ASSOC,
    DEFAULT_ICACHE_HIT_CC,
    DEFAULT_DCACHE_SETS,
    DEFAULT_DCACHE_ASSOC,
    DEFAULT_DCACHE_HIT_CC,
    DEFAULT_L2CACHE_SETS,
    DEFAULT_L2CACHE_ASSOC,
    DEFAULT_L2CACHE_HIT_CC,
    DEFAULT_BLOCK_SIZE_BYTES,
    MEM_FETCH_CC,
)
import logging

LOGGER = logging.getLogger("cachesim")


class UnknownCacheLevelError(LookupError):
    pass


@dataclass(frozen=True)
class CacheConfig:
    sets: int
    associativity: int
    hit_time: int

    @classmethod
    def parse(cls, value: str) -> "CacheConfig":
        """
        Parse the "sets:assoc:hit_time" notation, e.g. "512:2:1".
        """
        parts = value.split(":")
        if len(parts) != 3:
            raise ValueError(f"Expected sets:assoc:hit_time, got {value!r}")
        sets, associativity, hit_time = [int(x) for x in parts]
        return cls(sets, associativity, hit_time)

    def __str__(self):
        return f"{self.sets}:{self.associativity}:{self.hit_time}"


@dataclass(frozen=True)
class HierarchyConfig:
    icache: CacheConfig = CacheConfig(DEFAULT_ICACHE_SETS, DEFAULT_ICACHE_ASSOC, DEFAULT_ICACHE_HIT_CC)
    dcache: CacheConfig = CacheConfig(DEFAULT_DCACHE_SETS, DEFAULT_DCACHE_ASSOC, DEFAULT_DCACHE_HIT_CC)
    l2cache: CacheConfig = CacheConfig(DEFAULT_L2CACHE_SETS, DEFAULT_L2CACHE_ASSOC, DEFAULT_L2CACHE_HIT_CC)
    block_size_bytes: int = DEFAULT_BLOCK_SIZE_BYTES
    mem_latency: int = MEM_FETCH_CC
    # Carried and reported only. No back-invalidation is performed.
    inclusive: bool = False


@dataclass
class Hierarchy:
    """
    Split L1 instruction and data caches in front of a shared L2, with main
    memory at a fixed latency below the L2.
    """
    config: HierarchyConfig
    memory: MainMemory = field(init=False)
    l2cache: Cache = field(init=False)
    icache: Cache = field(init=False)
    dcache: Cache = field(init=False)

    def __post_init__(self):
        config = self.config
        if config.block_size_bytes < 0:
            raise InvalidGeometryError(f"block size must not be negative, got {config.block_size_bytes}")
        if config.mem_latency < 0:
            raise InvalidGeometryError(f"memory latency must not be negative, got {config.mem_latency}")

        self.memory = MainMemory(config.mem_latency)
        self.l2cache = self._build(CacheLevel.L2, config.l2cache, self.memory)
        self.icache = self._build(CacheLevel.INSTRUCTION, config.icache, self.l2cache)
        self.dcache = self._build(CacheLevel.DATA, config.dcache, self.l2cache)
        LOGGER.info(
            f"Hierarchy ready: block size {config.block_size_bytes}, "
            f"memory latency {config.mem_latency}, inclusive {config.inclusive}"
        )

    def _build(self, level: CacheLevel, geometry: CacheConfig, next_level) -> Cache:
        cache = Cache(
            name=level.value,
            set_count=geometry.sets,
            associativity=geometry.associativity,
            hit_time=geometry.hit_time,
            block_size_bytes=self.config.block_size_bytes,
            next_level=next_level,
        )
        LOGGER.info(
            f"{level.value}: {geometry.sets} sets, {geometry.associativity}-way, hit time {geometry.hit_time}, "
            f"bits tag/index/offset = {cache.tag_bits}/{cache.m_set}/{cache.n_block}"
        )
        return cache

    def cache(self, level: CacheLevel) -> Cache:
        match level:
            case CacheLevel.INSTRUCTION:
                return self.icache
            case CacheLevel.DATA:
                return self.dcache
            case CacheLevel.L2:
                return self.l2cache
            case _:
                raise UnknownCacheLevelError(f"Error, no cache level {level!r}")

    def access(self, level: CacheLevel, address: int) -> int:
        return self.cache(level).access(address)

    def access_instruction(self, address: int) -> int:
        return self.access(CacheLevel.INSTRUCTION, address)

    def access_data(self, address: int) -> int:
        return self.access(CacheLevel.DATA, address)

    @property
    def inclusive(self) -> bool:
        return self.config.inclusive

    def stats(self) -> dict[str, CacheStats]:
        return {level.value: self.cache(level).stats() for level in CacheLevel}
