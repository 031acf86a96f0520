import argparse
import sys
from collections import namedtuple

from errors import InternalInvariantViolation, MalformedInput, SimulationError
from memory_manager import PhysicalMemory, Statistics
from page_table import PageTable, page_number
from replacement import DEFAULT_SEED, Policy, ReplacementEngine
from trace_reader import READ, WRITE, TraceRecord, read_trace

# Returned by evict(): the page that used to live in the reclaimed frame
EvictedPage = namedtuple('EvictedPage', ['page', 'dirty'])


class VirtualMemorySimulator:

    def __init__(self, num_frames=32, policy=Policy.FIFO, seed=DEFAULT_SEED, debug=False):
        if isinstance(policy, str):
            policy = Policy.from_name(policy)
        self.policy = policy
        self.seed = seed
        self.debug = debug
        self.physical_memory = PhysicalMemory(num_frames=num_frames)
        self.page_table = PageTable()
        self.replacement = ReplacementEngine(self.physical_memory, seed=seed)
        self.stats = Statistics()
        self.current_time = 0

    @property
    def num_frames(self):
        return self.physical_memory.num_frames

    def next_clock(self):
        now = self.current_time
        self.current_time += 1
        return now

    def lookup(self, page):
        frame_num = self.page_table.lookup(page)
        if frame_num is not None:
            record = self.physical_memory.get_frame_info(frame_num)
            record.recency = self.next_clock()
            record.referenced = True
        return frame_num

    def allocate(self, page):
        # Only valid while free frames remain; the driver decides that.
        self.page_table.check_page(page)
        frame_num = self.physical_memory.allocate(page, self.next_clock())
        self.page_table.map(page, frame_num)
        return frame_num

    def evict(self, page, policy=None):
        """
        Reclaim a frame for `page` when memory is full.

        Returns (frame_num, EvictedPage) where frame_num now holds `page` and
        EvictedPage describes what was there before.
        """
        if policy is None:
            policy = self.policy
        elif isinstance(policy, str):
            policy = Policy.from_name(policy)
        self.page_table.check_page(page)

        # Checked before selection so cursors and reference bits stay as they were
        if not self.physical_memory.is_full():
            raise InternalInvariantViolation(
                policy, self.physical_memory.next_frame, "evict called while free frames remain")

        frame_num = self.replacement.select_victim(policy)
        record = self.physical_memory.get_frame_info(frame_num)
        victim = EvictedPage(record.page, record.dirty)
        if victim.page is None:
            raise InternalInvariantViolation(policy, frame_num, "victim frame holds no page")

        self.page_table.unmap(victim.page)
        self.page_table.map(page, frame_num)
        record.install(page, self.next_clock())
        return frame_num, victim

    def mark_dirty(self, frame_num):
        self.physical_memory.mark_dirty(frame_num)

    def handle_memory_reference(self, address, operation):
        if operation not in (READ, WRITE):
            raise MalformedInput(self.stats.events + 1, f"{address:x} {operation}")

        page_num = page_number(address)
        self.stats.record_event()

        frame_num = self.lookup(page_num)
        if frame_num is None:
            if self.debug:
                print(f"Page fault {page_num:8d}")

            if not self.physical_memory.is_full():
                frame_num = self.allocate(page_num)
                self.stats.record_page_fault()
            else:
                frame_num, victim = self.evict(page_num)
                self.stats.record_page_fault(is_dirty_replacement=victim.dirty)
                if self.debug:
                    if victim.dirty:
                        print(f"Disk write {victim.page:8d}")
                    else:
                        print(f"Discard    {victim.page:8d}")

        if operation == WRITE:
            self.mark_dirty(frame_num)

        if self.debug:
            if operation == READ:
                print(f"reading    {page_num:8d}")
            else:
                print(f"writing    {page_num:8d}")

        return frame_num

    def run_simulation(self, records):
        for record in records:
            if not isinstance(record, TraceRecord):
                record = TraceRecord(*record)
            self.handle_memory_reference(record.address, record.kind)
        return self.stats

    def run_trace_file(self, filename):
        return self.run_simulation(read_trace(filename))

    def check_invariants(self):
        """Raise InternalInvariantViolation unless page table and frames agree."""
        for page, frame_num in self.page_table.items():
            if self.physical_memory.get_frame_info(frame_num).page != page:
                raise InternalInvariantViolation(
                    self.policy, frame_num, f"page table maps page {page} to a frame not holding it")
        for frame_num, record in enumerate(self.physical_memory.frames):
            if record.is_free():
                if frame_num < self.physical_memory.allocated:
                    raise InternalInvariantViolation(
                        self.policy, frame_num, "allocated frame holds no page")
            elif self.page_table.lookup(record.page) != frame_num:
                raise InternalInvariantViolation(
                    self.policy, frame_num, f"page {record.page} missing from page table")

    def report(self):
        return (f"total memory frames:  {self.num_frames}\n"
                f"{self.stats}\n"
                f"seed:                {self.seed}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='memsim',
        description='Simulate page replacement over a memory access trace.')
    parser.add_argument('tracefile', help='trace of "<hex address> <R|W>" lines')
    parser.add_argument('frames', type=int, help='number of physical frames')
    parser.add_argument('algorithm', choices=[p.value for p in Policy],
                        help='page replacement algorithm')
    parser.add_argument('mode', choices=['quiet', 'debug'], help='debug output')
    parser.add_argument('seed', type=int, nargs='?', default=DEFAULT_SEED,
                        help='seed for the random policy (default: %(default)s)')
    args = parser.parse_args(argv)
    if args.frames < 1:
        parser.error("Frame number must be at least 1")
    return args


def main(argv=None):
    args = parse_args(argv)

    try:
        simulator = VirtualMemorySimulator(num_frames=args.frames,
                                           policy=Policy.from_name(args.algorithm),
                                           seed=args.seed,
                                           debug=args.mode == 'debug')
        simulator.run_trace_file(args.tracefile)
    except OSError:
        print(f"Cannot open trace file {args.tracefile}", file=sys.stderr)
        return 1
    except SimulationError as e:
        print(e, file=sys.stderr)
        return 1

    print(simulator.report())
    return 0


if __name__ == '__main__':
    sys.exit(main())
