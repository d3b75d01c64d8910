from ..errors import IncompleteResultsError
from .harness import BenchmarkInvocation, Harness


class ResultCollector:
    """Holds one captured invocation per harness.

    Content is stored as-is; ``require_complete`` is the gate before composing
    a report.
    """

    def __init__(self) -> None:
        self._invocations: dict[Harness, BenchmarkInvocation] = {}

    def add(self, invocation: BenchmarkInvocation) -> None:
        if invocation.harness in self._invocations:
            raise ValueError(f"{invocation.harness.value} result already collected")
        self._invocations[invocation.harness] = invocation

    def get(self, harness: Harness) -> BenchmarkInvocation | None:
        return self._invocations.get(harness)

    @property
    def is_complete(self) -> bool:
        return all(h in self._invocations for h in Harness)

    def missing(self) -> list[Harness]:
        return [h for h in Harness if h not in self._invocations]

    def require_complete(self) -> None:
        if not self.is_complete:
            names = ", ".join(h.value for h in self.missing())
            raise IncompleteResultsError(f"missing harness output: {names}")

    def outputs(self) -> dict[Harness, str]:
        self.require_complete()
        return {h: self._invocations[h].output for h in Harness}

    def __len__(self) -> int:
        return len(self._invocations)
