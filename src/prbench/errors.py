from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .runner.harness import BenchmarkInvocation


class PipelineError(Exception):
    """Base class for failures that end a pipeline run."""


class EventError(PipelineError):
    """The trigger event payload is missing required fields."""


class ProvisioningError(PipelineError):
    """A provisioning command failed or a required tool is missing."""


class HarnessError(PipelineError):
    """A benchmark harness exited with a non-zero status."""

    def __init__(self, invocation: "BenchmarkInvocation") -> None:
        self.invocation = invocation
        super().__init__(
            f"{invocation.harness.value} harness failed (code {invocation.returncode}): "
            f"{' '.join(invocation.argv)}"
        )


class IncompleteResultsError(PipelineError):
    """Report composition was attempted without both harness outputs."""


class PublishError(PipelineError):
    """Creating the pull request comment failed."""
