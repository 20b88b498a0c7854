from dataclasses import dataclass
from typing import Iterable, Iterator


class TraceFormatError(ValueError):
    pass


@dataclass
class MemAccess:
    pc: int
    address: int # 0 when the instruction makes no data access

    def has_data_access(self) -> bool:
        return self.address != 0


def parse_line(line: str, lineno: int = 0) -> MemAccess:
    line_list = line.split()
    if len(line_list) != 2:
        raise TraceFormatError(f"line {lineno}: expected '<pc> <address>', got {line.strip()!r}")
    try:
        return MemAccess(int(line_list[0], 16), int(line_list[1], 16))
    except ValueError as e:
        raise TraceFormatError(f"line {lineno}: {e}") from e


def read_trace(lines: Iterable[str]) -> Iterator[MemAccess]:
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        yield parse_line(line, lineno)
