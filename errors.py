class SimulationError(Exception):
    """Base class for fatal simulator errors. None of these are retried."""


class AllocationFailure(SimulationError):
    def __init__(self, num_frames):
        super().__init__(f"Cannot create MMU with {num_frames} frames")
        self.num_frames = num_frames


class InternalInvariantViolation(SimulationError):
    def __init__(self, policy, frame, reason):
        super().__init__(f"[BUG] evict(): {reason} (policy={policy}, frame={frame})")
        self.policy = policy
        self.frame = frame


class MalformedInput(SimulationError):
    def __init__(self, line_number, line):
        super().__init__(f"Badly formatted file. Error on line {line_number}: {line!r}")
        self.line_number = line_number
        self.line = line
