import time
from dataclasses import dataclass, field
from typing import Optional

@dataclass(frozen=True)
class Measurement:
    """
    A wall-clock reading. Subtracting an earlier reading via `difference`
    yields the elapsed time between both.
    """
    timestamp: float = field(default_factory=time.perf_counter)
    elapsed: Optional[float] = None

    def difference(self, begin: "Measurement") -> "Measurement":
        return Measurement(timestamp=self.timestamp, elapsed=self.timestamp - begin.timestamp)

    def __str__(self) -> str:
        if self.elapsed is None:
            return "no measurement"
        return f"{self.elapsed * 1000:.1f}ms"
