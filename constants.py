"""
Default hierarchy parameters, in abstract cycles.
L1 caches hit in 1 cycle and are tiny direct-mapped caches. The shared L2 is
8-way and takes 10 cycles. A miss in L2 goes to main memory, which takes
another 100 cycles. Blocks are 64 bytes and addresses are 32 bits wide.
"""
ADDRESS_BITS = 32
ADDRESS_MASK = (1 << ADDRESS_BITS) - 1

DEFAULT_ICACHE_SETS = 16
DEFAULT_ICACHE_ASSOC = 1
DEFAULT_ICACHE_HIT_CC = 1

DEFAULT_DCACHE_SETS = 16
DEFAULT_DCACHE_ASSOC = 1
DEFAULT_DCACHE_HIT_CC = 1

DEFAULT_L2CACHE_SETS = 128
DEFAULT_L2CACHE_ASSOC = 8
DEFAULT_L2CACHE_HIT_CC = 10

DEFAULT_BLOCK_SIZE_BYTES = 64
MEM_FETCH_CC = 100
