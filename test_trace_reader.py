import pytest

from errors import MalformedInput
from trace_reader import TraceRecord, parse_line, parse_lines, read_trace


def test_parse_line():
    assert parse_line("0041f7a0 R\n", 1) == TraceRecord(0x0041f7a0, 'R')
    assert parse_line("  0x13f5e2c0   W", 1) == TraceRecord(0x13f5e2c0, 'W')


@pytest.mark.parametrize('line', [
    "0041f7a0",
    "0041f7a0 R extra",
    "zzzz R",
    "1_0 R",
    "+10 R",
    "-10 R",
    "0x R",
    "١٢ R",
    "100000000 R",
    "0041f7a0 r",
    "0041f7a0 X",
])
def test_malformed_line(line):
    with pytest.raises(MalformedInput) as exc_info:
        parse_line(line, 12)
    assert exc_info.value.line_number == 12


def test_blank_lines_are_skipped_but_counted():
    lines = ["00001000 R\n", "\n", "00002000 W\n", "bogus\n"]
    records = parse_lines(lines)

    assert next(records) == (0x1000, 'R')
    assert next(records) == (0x2000, 'W')
    with pytest.raises(MalformedInput) as exc_info:
        next(records)
    assert exc_info.value.line_number == 4


def test_read_trace(tmp_path):
    path = tmp_path / 'trace.txt'
    path.write_text("0041f7a0 R\n13f5e2c0 W\n")

    assert list(read_trace(str(path))) == [(0x0041f7a0, 'R'), (0x13f5e2c0, 'W')]


def test_read_trace_reports_undecodable_line(tmp_path):
    path = tmp_path / 'trace.txt'
    path.write_bytes(b"00000000 R\n\xff\xfe000 W\n")
    records = read_trace(str(path))

    assert next(records) == (0, 'R')
    with pytest.raises(MalformedInput) as exc_info:
        next(records)
    assert exc_info.value.line_number == 2
