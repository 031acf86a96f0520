import re
from collections import namedtuple

from errors import MalformedInput
from page_table import ADDRESS_BITS

READ = 'R'
WRITE = 'W'

TraceRecord = namedtuple('TraceRecord', ['address', 'kind'])
# Same forms fscanf("%x") takes: optional 0x, then hex digits only
HEX_ADDRESS = re.compile(r"(0[xX])?[0-9a-fA-F]+")


def parse_line(line, line_number):
    """Parse one '<hex address> <R|W>' record, e.g. '0041f7a0 R'."""
    parts = line.split()
    if len(parts) != 2:
        raise MalformedInput(line_number, line.rstrip('\n'))

    if not HEX_ADDRESS.fullmatch(parts[0]):
        raise MalformedInput(line_number, line.rstrip('\n'))
    address = int(parts[0], 16)
    if not 0 <= address < (1 << ADDRESS_BITS):
        raise MalformedInput(line_number, line.rstrip('\n'))

    kind = parts[1]
    if kind not in (READ, WRITE):
        raise MalformedInput(line_number, line.rstrip('\n'))

    return TraceRecord(address, kind)


def parse_lines(lines):
    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue
        yield parse_line(line, line_number)


def read_trace(filename):
    with open(filename, 'r', encoding='ascii', errors='replace') as f:
        yield from parse_lines(f)
