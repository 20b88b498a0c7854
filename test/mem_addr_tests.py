import unittest

from cache import Cache, decode_address, intlog2
from memory_level import MainMemory


def create_mem_addr_test(sets, associativity, block_size_bytes, addr, expected_offset, expected_set_ind, expected_tag):
    cache = Cache(
        name="test",
        set_count=sets,
        associativity=associativity,
        hit_time=1,
        block_size_bytes=block_size_bytes,
        next_level=MainMemory(100),
    )
    info = cache.get_info_from_addr(addr)
    assert info.offset==expected_offset, f"Expected offset {expected_offset}, but got {info.offset}"
    assert info.set_index==expected_set_ind, f"Expected set index {expected_set_ind}, but got {info.set_index}"
    assert info.tag==expected_tag, f"Expected tag {expected_tag}, but got {info.tag}"

class TestMemAddr(unittest.TestCase):
    def test_mem_addr_1(self):
        create_mem_addr_test(4, 2, 8, 16, 0, 2, 0)

    def test_mem_addr_2(self):
        create_mem_addr_test(2, 2, 8, 36, 4, 0, 2)

    def test_mem_addr_3(self):
        create_mem_addr_test(2, 4, 16, 0x1F4, 4, 1, 15)

    def test_mem_addr_4(self):
        create_mem_addr_test(4, 2, 32, 0xFFFFFFFF, 31, 3, 33554431)

    def test_mem_addr_5(self):
        create_mem_addr_test(2, 2, 16, 16, 0, 1, 0)

    def test_block_size_one_has_no_offset(self):
        create_mem_addr_test(4, 1, 1, 0b1101, 0, 0b01, 0b11)

    def test_block_size_zero_has_no_offset(self):
        create_mem_addr_test(4, 1, 0, 0b1101, 0, 0b01, 0b11)

    def test_single_set_uses_whole_address_above_offset_as_tag(self):
        create_mem_addr_test(1, 4, 16, 0x1234, 4, 0, 0x123)

    def test_address_truncated_to_32_bits(self):
        self.assertEqual(decode_address(0x1_0000_0010, 4, 2), decode_address(0x10, 4, 2))

    def test_intlog2(self):
        self.assertEqual(intlog2(0), 0)
        self.assertEqual(intlog2(1), 0)
        self.assertEqual(intlog2(2), 1)
        self.assertEqual(intlog2(64), 6)
        self.assertEqual(intlog2(1 << 20), 20)

    def test_bit_widths(self):
        cache = Cache("test", 512, 2, 1, 64, MainMemory(100))
        self.assertEqual(cache.n_block, 6)
        self.assertEqual(cache.m_set, 9)
        self.assertEqual(cache.tag_bits, 17)

    def test_rebuilt_address_decodes_to_same_tag_and_index(self):
        addresses = [0, 1, 0x7F, 0x1234, 0xDEADBEEF, 0x80000000, 0xFFFFFFFF]
        for offset_bits, index_bits in [(0, 0), (0, 2), (4, 3), (6, 9), (5, 10)]:
            for addr in addresses:
                with self.subTest(addr=addr, offset_bits=offset_bits, index_bits=index_bits):
                    info = decode_address(addr, offset_bits, index_bits)
                    rebuilt = (info.tag << (offset_bits + index_bits)) | (info.set_index << offset_bits)
                    again = decode_address(rebuilt, offset_bits, index_bits)
                    self.assertEqual((again.tag, again.set_index), (info.tag, info.set_index))
                    self.assertEqual(again.offset, 0)

if __name__ == '__main__':
    unittest.main()
