import pytest

from replacement import Policy
from simulator import VirtualMemorySimulator
from trace_reader import TraceRecord


def reads(*pages):
    return [TraceRecord(page << 12, 'R') for page in pages]


def test_single_frame_fifo_faults_on_every_distinct_access():
    simulator = VirtualMemorySimulator(num_frames=1, policy=Policy.FIFO)
    stats = simulator.run_simulation([(0x0000, 'R'), (0x1000, 'R'), (0x0000, 'R')])

    assert stats.events == 3
    assert stats.page_faults == 3
    assert stats.disk_writes == 0


def test_lru_two_frames_evicts_least_recently_used():
    simulator = VirtualMemorySimulator(num_frames=2, policy=Policy.LRU)
    stats = simulator.run_simulation(reads(0, 1, 0, 2))

    assert stats.page_faults == 3
    assert stats.disk_writes == 0
    assert stats.fault_rate == pytest.approx(0.75)
    assert 0 in simulator.page_table
    assert 1 not in simulator.page_table
    assert 2 in simulator.page_table


def test_offset_bits_do_not_change_the_page():
    simulator = VirtualMemorySimulator(num_frames=1, policy=Policy.FIFO)
    stats = simulator.run_simulation([(0x2000, 'R'), (0x2fff, 'W'), (0x2abc, 'R')])

    assert stats.page_faults == 1
    assert simulator.physical_memory.get_frame_info(0).dirty


def test_written_page_costs_a_disk_write_when_evicted():
    simulator = VirtualMemorySimulator(num_frames=2, policy=Policy.FIFO)
    stats = simulator.run_simulation([
        (0x0000, 'W'),
        (0x1000, 'R'),
        (0x2000, 'R'),  # evicts dirty page 0
        (0x3000, 'R'),  # evicts clean page 1
    ])

    assert stats.page_faults == 4
    assert stats.disk_writes == 1


def test_dirty_bit_survives_hits_until_eviction():
    simulator = VirtualMemorySimulator(num_frames=2, policy=Policy.FIFO)
    stats = simulator.run_simulation([
        (0x0000, 'W'),
        (0x0000, 'R'),
        (0x0000, 'R'),
        (0x1000, 'R'),
        (0x2000, 'R'),
    ])

    assert stats.page_faults == 3
    assert stats.disk_writes == 1


@pytest.mark.parametrize('policy', list(Policy))
def test_read_only_trace_never_writes_to_disk(policy):
    simulator = VirtualMemorySimulator(num_frames=3, policy=policy)
    stats = simulator.run_simulation(reads(*[i % 7 for i in range(100)]))

    assert stats.events == 100
    assert stats.disk_writes == 0
