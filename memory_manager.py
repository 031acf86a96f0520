from errors import AllocationFailure


class FrameRecord:
    def __init__(self):
        self.page = None  # None means the frame is free
        self.dirty = False
        self.recency = 0  # LRU timestamp
        self.referenced = False  # Clock reference bit

    def install(self, page, recency):
        self.page = page
        self.dirty = False
        self.recency = recency
        self.referenced = True

    def is_free(self):
        return self.page is None

    def __repr__(self):
        return (f"FrameRecord(page={self.page}, dirty={self.dirty}, "
                f"recency={self.recency}, referenced={self.referenced})")


class PhysicalMemory:
    def __init__(self, num_frames=32):
        if num_frames < 1:
            raise ValueError(f"Frame number must be at least 1, got {num_frames}")
        self.num_frames = num_frames
        try:
            self.frames = [FrameRecord() for _ in range(num_frames)]
        except MemoryError as e:
            raise AllocationFailure(num_frames) from e
        # Next free frame, handed out sequentially and never reused
        self.next_frame = 0

    @property
    def allocated(self):
        return self.next_frame

    def is_full(self):
        return self.next_frame == self.num_frames

    def allocate(self, page, recency):
        # The caller decides when memory is full; no guard here.
        frame_num = self.next_frame
        self.frames[frame_num].install(page, recency)
        self.next_frame += 1
        return frame_num

    def get_frame_info(self, frame_num):
        return self.frames[frame_num]

    def mark_dirty(self, frame_num):
        self.frames[frame_num].dirty = True


class Statistics:
    def __init__(self):
        self.events = 0
        self.page_faults = 0
        self.disk_writes = 0

    def record_event(self):
        self.events += 1

    def record_page_fault(self, is_dirty_replacement=False):
        self.page_faults += 1
        if is_dirty_replacement:
            # Dirty victim has to be written back before the frame is reused
            self.disk_writes += 1

    @property
    def disk_reads(self):
        # Every fault reads the page in from disk
        return self.page_faults

    @property
    def fault_rate(self):
        if self.events == 0:
            return 0.0
        return self.page_faults / self.events

    def __str__(self):
        return (f"events in trace:      {self.events}\n"
                f"total disk reads:     {self.disk_reads}\n"
                f"total disk writes:    {self.disk_writes}\n"
                f"page fault rate:      {self.fault_rate:.4f}")
