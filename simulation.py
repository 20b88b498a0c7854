from dataclasses import dataclass
from hierarchy import Hierarchy
from memory_level import CacheLevel
from mem_trace import MemAccess, read_trace
import sys
import logging

LOGGER = logging.getLogger("cachesim")

@dataclass
class Simulation:
    hierarchy: Hierarchy
    input_file: str = "-"
    total_refs: int = 0
    total_cycles: int = 0

    def step(self, access: MemAccess) -> int:
        """
        Feed one trace record through the hierarchy: an instruction fetch at
        the pc, then a data access if the record has one. Returns the cycles
        spent on the record.
        """
        cycles = self.hierarchy.access_instruction(access.pc)
        self.total_refs += 1
        if access.has_data_access():
            cycles += self.hierarchy.access_data(access.address)
            self.total_refs += 1
        self.total_cycles += cycles
        return cycles

    def run(self, lines) -> None:
        for access in read_trace(lines):
            self.step(access)

    def simulate(self):
        LOGGER.info(f"Reading trace from {'stdin' if self.input_file == '-' else self.input_file}")
        if self.input_file == "-":
            self.run(sys.stdin)
        else:
            with open(self.input_file) as f:
                self.run(f)
        LOGGER.info(f"Trace done: {self.total_refs} memory accesses, {self.total_cycles} cycles")

    @property
    def total_penalties(self) -> int:
        return self.hierarchy.icache.penalties + self.hierarchy.dcache.penalties

    @property
    def avg_access_time(self) -> float:
        return self.total_cycles / self.total_refs if self.total_refs else 0.0

    def print_final_outputs(self):
        config = self.hierarchy.config
        print("====Cache configuration====")
        print(f"I-cache: {config.icache}")
        print(f"D-cache: {config.dcache}")
        print(f"L2-cache: {config.l2cache}")
        print(f"Block size: {config.block_size_bytes} bytes")
        print(f"Memory latency: {config.mem_latency} cycles")
        print(f"Inclusive: {config.inclusive}")
        for level in CacheLevel:
            stats = self.hierarchy.cache(level).stats()
            print("-------------")
            print(f"{stats.name} refs: {stats.refs}")
            print(f"{stats.name} misses: {stats.misses}")
            print(f"{stats.name} penalties: {stats.penalties}")
            print(f"{stats.name} miss rate: {stats.miss_rate:.2%}")
            print(f"{stats.name} avg access time: {stats.avg_access_time:.2f}")
        print("----------")
        print(f"Total memory accesses: {self.total_refs}")
        print(f"Total memory access time: {self.total_cycles}")
        print(f"Total penalties: {self.total_penalties}")
        print(f"Average memory access time: {self.avg_access_time:.2f}")
