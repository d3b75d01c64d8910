"""Label-triggered benchmark pipeline.

gate -> provision -> counter harness -> statistical harness -> compose -> publish

Stages run strictly one after another. The first failure moves the pipeline to
FAILED and propagates; nothing after it runs and no partial report is posted.
"""

import enum
import logging
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .clients import (
    GitHubAPIError,
    GitHubClient,
    GitHubNetworkError,
    PublishedComment,
    PublishRequest,
)
from .config import PipelineConfig
from .errors import PublishError
from .events import TriggerEvent, should_run
from .report import ReportMessage, compose_report
from .runner.harness import (
    BenchmarkInvocation,
    Harness,
    HarnessSpec,
    counter_spec,
    run_harness,
    statistical_spec,
)
from .runner.provision import check_tools, provision
from .runner.results import ResultCollector

logger = logging.getLogger(__name__)


class PipelineState(str, enum.Enum):
    IDLE = "idle"
    GATED_OUT = "gated_out"
    PROVISIONING = "provisioning"
    RUNNING_COUNTER = "running_counter"
    RUNNING_STATISTICAL = "running_statistical"
    COMPOSING = "composing"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS: dict[PipelineState, frozenset[PipelineState]] = {
    PipelineState.IDLE: frozenset(
        {PipelineState.GATED_OUT, PipelineState.PROVISIONING, PipelineState.FAILED}
    ),
    PipelineState.PROVISIONING: frozenset({PipelineState.RUNNING_COUNTER, PipelineState.FAILED}),
    PipelineState.RUNNING_COUNTER: frozenset(
        {PipelineState.RUNNING_STATISTICAL, PipelineState.FAILED}
    ),
    PipelineState.RUNNING_STATISTICAL: frozenset({PipelineState.COMPOSING, PipelineState.FAILED}),
    # DONE directly from COMPOSING on dry runs
    PipelineState.COMPOSING: frozenset(
        {PipelineState.PUBLISHING, PipelineState.DONE, PipelineState.FAILED}
    ),
    PipelineState.PUBLISHING: frozenset({PipelineState.DONE, PipelineState.FAILED}),
}


class CommentPublisher(Protocol):
    def create_comment(self, request: PublishRequest) -> PublishedComment: ...


HarnessRunner = Callable[..., BenchmarkInvocation]


@dataclass
class PipelineResult:
    state: PipelineState
    event: TriggerEvent
    invocations: dict[Harness, BenchmarkInvocation] = field(default_factory=dict)
    message: ReportMessage | None = None
    comment: PublishedComment | None = None

    @property
    def succeeded(self) -> bool:
        return self.state in (PipelineState.GATED_OUT, PipelineState.DONE)


class Pipeline:
    """Single-shot benchmark pipeline for one trigger event.

    A Pipeline instance runs once; create a new one per event.
    """

    def __init__(
        self,
        config: PipelineConfig,
        *,
        cwd: Path | None = None,
        workdir: Path | None = None,
        dry_run: bool = False,
        provisioner: Callable[[], None] | None = None,
        runner: HarnessRunner = run_harness,
        publisher: CommentPublisher | None = None,
    ) -> None:
        self._config = config
        self._cwd = cwd
        self._workdir = workdir
        self._dry_run = dry_run
        self._provisioner = provisioner or self._default_provision
        self._runner = runner
        self._publisher = publisher
        self.state = PipelineState.IDLE
        self.history: list[PipelineState] = [PipelineState.IDLE]

    def _advance(self, target: PipelineState) -> None:
        allowed = _TRANSITIONS.get(self.state, frozenset())
        if target not in allowed:
            raise RuntimeError(f"invalid pipeline transition {self.state.value} -> {target.value}")
        logger.debug("Pipeline state %s -> %s", self.state.value, target.value)
        self.state = target
        self.history.append(target)

    def _default_provision(self) -> None:
        if self._config.skip_provision:
            logger.info("Provisioning skipped; checking tools only")
        else:
            provision()
        check_tools()

    def _harness_specs(self) -> tuple[HarnessSpec, HarnessSpec]:
        return (
            counter_spec(self._config.target_package, self._config.iai_bench),
            statistical_spec(self._config.target_package, self._config.criterion_bench),
        )

    def _get_publisher(self) -> CommentPublisher:
        if self._publisher is not None:
            return self._publisher
        if not self._config.github_token:
            raise PublishError("GITHUB_TOKEN is not set; cannot publish the report")
        return GitHubClient(
            self._config.github_token,
            api_url=self._config.api_url,
            timeout=self._config.publish_timeout,
        )

    def _publish(self, request: PublishRequest) -> PublishedComment:
        publisher = self._get_publisher()
        try:
            return publisher.create_comment(request)
        except (GitHubAPIError, GitHubNetworkError) as exc:
            target = f"{request.owner}/{request.repo}#{request.number}"
            raise PublishError(f"failed to comment on {target}: {exc}") from exc

    def run(self, event: TriggerEvent) -> PipelineResult:
        """Run the pipeline for ``event``.

        Returns:
            PipelineResult in state GATED_OUT or DONE.

        Raises:
            PipelineError: Any stage failed; ``self.state`` is FAILED.
            RuntimeError: The pipeline already ran.
        """
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"pipeline already ran (state={self.state.value})")

        result = PipelineResult(state=self.state, event=event)

        if not should_run(event, self._config.marker_label):
            self._advance(PipelineState.GATED_OUT)
            result.state = self.state
            return result

        logger.info("Benchmarking %s", event.slug)
        try:
            if self._workdir is not None:
                self._execute(event, result, self._workdir)
            else:
                with tempfile.TemporaryDirectory(prefix="prbench-") as tmp:
                    self._execute(event, result, Path(tmp))
        except Exception as exc:
            logger.error("Pipeline failed in %s: %s", self.state.value, exc)
            self._advance(PipelineState.FAILED)
            raise

        result.state = self.state
        return result

    def _execute(self, event: TriggerEvent, result: PipelineResult, workdir: Path) -> None:
        collector = ResultCollector()
        counter, statistical = self._harness_specs()

        self._advance(PipelineState.PROVISIONING)
        self._provisioner()

        self._advance(PipelineState.RUNNING_COUNTER)
        collector.add(self._runner(counter, cwd=self._cwd, workdir=workdir))

        self._advance(PipelineState.RUNNING_STATISTICAL)
        collector.add(self._runner(statistical, cwd=self._cwd, workdir=workdir))

        self._advance(PipelineState.COMPOSING)
        outputs = collector.outputs()
        result.invocations = {h: inv for h in Harness if (inv := collector.get(h)) is not None}
        result.message = compose_report(
            outputs[Harness.COUNTER],
            outputs[Harness.STATISTICAL],
            max_chars=self._config.max_output_chars,
        )

        if self._dry_run:
            logger.info("Dry run: not publishing report for %s", event.slug)
            self._advance(PipelineState.DONE)
            return

        self._advance(PipelineState.PUBLISHING)
        result.comment = self._publish(
            PublishRequest(
                owner=event.owner,
                repo=event.repo,
                number=event.number,
                body=result.message.body,
            )
        )
        logger.info("Published benchmark report: %s", result.comment.html_url)
        self._advance(PipelineState.DONE)
