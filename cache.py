from dataclasses import dataclass, field
from typing import Optional
from constants import ADDRESS_BITS, ADDRESS_MASK
from memory_level import MemoryLevel
import logging
LOGGER = logging.getLogger("cachesim")


class InvalidGeometryError(ValueError):
    pass


@dataclass
class MemAddressCacheInfo:
    tag: int
    set_index: int
    offset: int


def intlog2(n: int) -> int:
    # log2(0) and log2(1) are both 0
    result = 0
    while n > 1:
        n >>= 1
        result += 1
    return result


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def decode_address(mem_addr: int, offset_bits: int, index_bits: int) -> MemAddressCacheInfo:
    mem_addr &= ADDRESS_MASK
    offset = mem_addr & ((1 << offset_bits) - 1)
    set_index = (mem_addr >> offset_bits) & ((1 << index_bits) - 1)
    tag = mem_addr >> (offset_bits + index_bits)
    return MemAddressCacheInfo(
        tag, set_index, offset
    )


@dataclass
class CacheLine:
    tag: Optional[int] = None
    valid: bool = False
    lru: int = 0 # 0 = most recently used


@dataclass
class CacheSet:
    """
    The `associativity` lines of one set, as a window onto the owning cache's
    flat line buffer starting at `base`.
    """
    lines: list[CacheLine]
    base: int
    associativity: int
    index: int

    def line(self, way: int) -> CacheLine:
        return self.lines[self.base + way]

    def ways(self):
        return range(self.associativity)

    def find(self, tag: int) -> Optional[int]:
        for way in self.ways():
            line = self.line(way)
            if line.valid and line.tag == tag:
                return way
        return None

    def is_in_cache(self, tag: int) -> bool:
        return self.find(tag) is not None

    def occupied(self) -> int:
        return sum(1 for way in self.ways() if self.line(way).valid)

    def is_cache_set_full(self) -> bool:
        return self.occupied() == self.associativity

    def tags(self) -> list[int]:
        return [self.line(way).tag for way in self.ways() if self.line(way).valid]

    def on_block_use(self, way: int):
        for other in self.ways():
            line = self.line(other)
            if other == way:
                line.lru = 0
            elif line.valid:
                line.lru += 1

    def victim(self) -> int:
        if not self.is_cache_set_full():
            for way in self.ways():
                if not self.line(way).valid:
                    return way
        # strict max keeps the first (lowest) way on a tie
        lru_way = 0
        for way in self.ways():
            if self.line(way).lru > self.line(lru_way).lru:
                lru_way = way
        return lru_way

    def insert(self, tag: int) -> int:
        way = self.victim()
        line = self.line(way)
        if line.valid:
            LOGGER.debug(f"Set {self.index}: evicting tag {line.tag:#x} from way {way}")
        line.tag = tag
        line.valid = True
        return way

    def lookup(self, tag: int) -> bool:
        way = self.find(tag)
        hit = way is not None
        if not hit:
            way = self.insert(tag)
        self.on_block_use(way)
        return hit


@dataclass
class CacheStats:
    name: str
    hit_time: int
    refs: int
    misses: int
    penalties: int

    @property
    def miss_rate(self) -> float:
        return self.misses / self.refs if self.refs else 0.0

    @property
    def avg_access_time(self) -> float:
        if not self.refs:
            return 0.0
        return self.hit_time + self.penalties / self.refs


@dataclass
class Cache(MemoryLevel):
    """
    Set associative cache level with LRU replacement. Tracks tags only.
    Misses are forwarded to `next_level` and its latency counts as the
    miss penalty.
    """
    name: str
    set_count: int
    associativity: int
    hit_time: int
    block_size_bytes: int
    next_level: MemoryLevel
    n_block: int = field(init=False) # block size = 2^n bytes
    m_set: int = field(init=False) # Number of cache sets = 2^m
    lines: list[CacheLine] = field(init=False, repr=False)
    refs: int = 0
    misses: int = 0
    penalties: int = 0

    def __post_init__(self):
        if not is_power_of_two(self.set_count):
            raise InvalidGeometryError(
                f"{self.name}: number of sets must be a power of two, got {self.set_count}"
            )
        if self.associativity <= 0:
            raise InvalidGeometryError(
                f"{self.name}: associativity must be positive, got {self.associativity}"
            )
        self.n_block = intlog2(self.block_size_bytes)
        self.m_set = intlog2(self.set_count)
        self.lines = [CacheLine() for _ in range(self.set_count * self.associativity)]

    @property
    def tag_bits(self) -> int:
        return max(0, ADDRESS_BITS - self.m_set - self.n_block)

    def get_info_from_addr(self, mem_addr: int) -> MemAddressCacheInfo:
        return decode_address(mem_addr, self.n_block, self.m_set)

    def get_set(self, set_index: int) -> CacheSet:
        return CacheSet(self.lines, set_index * self.associativity, self.associativity, set_index)

    def is_in_cache(self, mem_addr: int) -> bool:
        addr_info = self.get_info_from_addr(mem_addr)
        return self.get_set(addr_info.set_index).is_in_cache(addr_info.tag)

    def access(self, mem_addr: int) -> int:
        self.refs += 1
        addr_info = self.get_info_from_addr(mem_addr)
        cache_set = self.get_set(addr_info.set_index)
        if cache_set.lookup(addr_info.tag):
            self.log(f"hit {mem_addr:#010x} (set {addr_info.set_index}, tag {addr_info.tag:#x})")
            return self.hit_time

        self.misses += 1
        self.log(f"miss {mem_addr:#010x} (set {addr_info.set_index}, tag {addr_info.tag:#x})")
        penalty = self.next_level.access(mem_addr)
        self.penalties += penalty
        return self.hit_time + penalty

    def stats(self) -> CacheStats:
        return CacheStats(self.name, self.hit_time, self.refs, self.misses, self.penalties)

    def log(self, message: str):
        LOGGER.debug(f"{self.name}: " + message)
