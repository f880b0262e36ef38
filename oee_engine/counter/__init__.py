from .pulse_counter import CounterSample, CounterSnapshot, PulseCounter
from .service import CounterConfig, PulseCounterService

__all__ = [
    "CounterSample",
    "CounterSnapshot",
    "PulseCounter",
    "CounterConfig",
    "PulseCounterService",
]
