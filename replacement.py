import enum
import random

from errors import InternalInvariantViolation

DEFAULT_SEED = 1
# Same source range as glibc rand()
RAND_MAX = 2**31 - 1


class Policy(enum.Enum):
    RANDOM = 'rand'
    FIFO = 'fifo'
    LRU = 'lru'
    CLOCK = 'clock'
    CLEAN_CLOCK = 'clean-clock'

    @classmethod
    def from_name(cls, name):
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                "Replacement algorithm must be rand, fifo, lru, clock or clean-clock"
            ) from None

    def __str__(self):
        return self.value


class ReplacementEngine:
    """
    Victim selection for a full physical memory.

    Each policy keeps its own cursor, carried across calls for the lifetime of
    the engine. Selection only moves cursors and clears reference bits; the
    caller performs the actual swap.
    """

    def __init__(self, physical_memory, seed=DEFAULT_SEED):
        self.physical_memory = physical_memory
        self.rng = random.Random(seed)
        self.cursors = {policy: 0 for policy in Policy}

    @property
    def num_frames(self):
        return self.physical_memory.num_frames

    def select_victim(self, policy):
        if policy is Policy.RANDOM:
            victim = self.select_victim_random()
        elif policy is Policy.FIFO:
            victim = self.select_victim_fifo()
        elif policy is Policy.LRU:
            victim = self.select_victim_lru()
        elif policy is Policy.CLOCK:
            victim = self.select_victim_clock()
        elif policy is Policy.CLEAN_CLOCK:
            victim = self.select_victim_clean_clock()
        else:
            raise ValueError(f"Unknown algorithm: {policy}")

        if victim is None or not 0 <= victim < self.num_frames:
            raise InternalInvariantViolation(policy, victim, "victim frame not set")
        return victim

    def _advance(self, policy):
        self.cursors[policy] = (self.cursors[policy] + 1) % self.num_frames

    def select_victim_random(self):
        # Rejection sampling: draws from the uneven tail of the source range
        # are thrown away so every frame is equally likely.
        span = self.num_frames
        if span <= 0:
            return None
        limit = (RAND_MAX + 1) - ((RAND_MAX + 1) % span)
        while True:
            r = self.rng.getrandbits(31)
            if r < limit:
                return r % span

    def select_victim_fifo(self):
        if self.num_frames <= 0:
            return None
        victim_frame = self.cursors[Policy.FIFO]
        self._advance(Policy.FIFO)
        return victim_frame

    def select_victim_lru(self):
        # Linear scan on purpose. Recency values are unique so the minimum is too.
        frames = self.physical_memory.frames
        victim_frame = None
        oldest = None
        for frame_num, record in enumerate(frames):
            if oldest is None or record.recency < oldest:
                oldest = record.recency
                victim_frame = frame_num
        return victim_frame

    def _second_chance(self, policy):
        frames = self.physical_memory.frames
        while frames[self.cursors[policy]].referenced:
            frames[self.cursors[policy]].referenced = False
            self._advance(policy)
        victim_frame = self.cursors[policy]
        self._advance(policy)
        return victim_frame

    def select_victim_clock(self):
        if self.num_frames <= 0:
            return None
        return self._second_chance(Policy.CLOCK)

    def select_victim_clean_clock(self):
        if self.num_frames <= 0:
            return None
        policy = Policy.CLEAN_CLOCK
        frames = self.physical_memory.frames

        # Pass 1: one full sweep looking for an unreferenced clean frame
        for _ in range(self.num_frames):
            record = frames[self.cursors[policy]]
            if record.referenced:
                record.referenced = False
            elif not record.dirty:
                victim_frame = self.cursors[policy]
                self._advance(policy)
                return victim_frame
            self._advance(policy)

        # Pass 2: plain clock, dirty frames allowed. Frames cleared above are
        # scanned again.
        return self._second_chance(policy)
