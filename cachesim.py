"""
Cache hierarchy simulator.
The command line should be
cachesim [--icache=S:A:H] [--dcache=S:A:H] [--l2cache=S:A:H] [--blocksize=N] [--memspeed=N] [--inclusive] [--verbose] [trace]
where each cache is given as sets:associativity:hit_time and
• "blocksize": block size in bytes, shared by every cache
• "memspeed": latency of main memory in cycles
• "inclusive": mark the L2 as inclusive (reported, not enforced)
• "trace": trace file of "<pc> <data address>" lines, stdin if omitted
For example, to run a trace through a 512 set direct-mapped I-cache, a 256 set
4-way D-cache and a 1024 set 8-way L2 with 32 byte blocks
cat trace.txt | cachesim --icache=512:1:2 --dcache=256:4:2 --l2cache=1024:8:10 --blocksize=32 --memspeed=100
"""
import argparse
import logging
import sys
from hierarchy import CacheConfig, Hierarchy, HierarchyConfig
from simulation import Simulation
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

LOGGER = logging.getLogger("cachesim")


def cache_config(value: str) -> CacheConfig:
    try:
        return CacheConfig.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cachesim", description="Simulate an I$/D$/L2$ cache hierarchy")
    parser.add_argument("--icache", type=cache_config,
        default=CacheConfig(DEFAULT_ICACHE_SETS, DEFAULT_ICACHE_ASSOC, DEFAULT_ICACHE_HIT_CC),
        help="I-cache as sets:assoc:hit_time")
    parser.add_argument("--dcache", type=cache_config,
        default=CacheConfig(DEFAULT_DCACHE_SETS, DEFAULT_DCACHE_ASSOC, DEFAULT_DCACHE_HIT_CC),
        help="D-cache as sets:assoc:hit_time")
    parser.add_argument("--l2cache", type=cache_config,
        default=CacheConfig(DEFAULT_L2CACHE_SETS, DEFAULT_L2CACHE_ASSOC, DEFAULT_L2CACHE_HIT_CC),
        help="L2-cache as sets:assoc:hit_time")
    parser.add_argument("--blocksize", type=int, default=DEFAULT_BLOCK_SIZE_BYTES,
        help="block size in bytes")
    parser.add_argument("--memspeed", type=int, default=MEM_FETCH_CC,
        help="main memory latency in cycles")
    parser.add_argument("--inclusive", action="store_true",
        help="mark the L2 as inclusive")
    parser.add_argument("--verbose", action="store_true",
        help="log every cache access")
    parser.add_argument("trace", nargs="?", default="-",
        help="trace file, '-' for stdin")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    LOGGER.info(f"Command arguments: icache - {args.icache}, dcache - {args.dcache}, l2cache - {args.l2cache}, "
                f"block size - {args.blocksize}, memory latency - {args.memspeed}, inclusive - {args.inclusive}")
    config = HierarchyConfig(
        icache=args.icache,
        dcache=args.dcache,
        l2cache=args.l2cache,
        block_size_bytes=args.blocksize,
        mem_latency=args.memspeed,
        inclusive=args.inclusive,
    )
    try:
        simulation = Simulation(Hierarchy(config), args.trace)
        simulation.simulate()
    except (ValueError, OSError) as e:
        LOGGER.error(str(e))
        return 1
    simulation.print_final_outputs()
    return 0


if __name__ == "__main__":
    sys.exit(main())
