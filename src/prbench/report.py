"""Benchmark report composition.

Harness outputs are embedded in Markdown fenced code blocks. The fence is one
backtick longer than the longest backtick run in the content, so the content
can never close its own block and is carried through unchanged.
"""

import re
from dataclasses import dataclass

from .config import COUNTER_INTRO, REPORT_PREAMBLE, STATISTICAL_INTRO, TRUNCATION_NOTICE

_MIN_FENCE = 3
_BACKTICK_RUN = re.compile(r"`+")
_FENCE_LINE = re.compile(r"^(`{3,})$")


def fence_for(text: str) -> str:
    longest = max((len(m) for m in _BACKTICK_RUN.findall(text)), default=0)
    return "`" * max(_MIN_FENCE, longest + 1)


def code_block(text: str) -> str:
    fence = fence_for(text)
    return f"{fence}\n{text}\n{fence}"


def _cap(text: str, max_chars: int | None) -> tuple[str, str | None]:
    if max_chars is None or len(text) <= max_chars:
        return text, None
    notice = TRUNCATION_NOTICE.format(max_chars=max_chars, total_chars=len(text))
    return text[:max_chars], notice


@dataclass(frozen=True)
class ReportMessage:
    preamble: str
    statistical_block: str
    counter_block: str
    statistical_notice: str | None = None
    counter_notice: str | None = None

    @property
    def body(self) -> str:
        parts = [f"{self.preamble}\n{STATISTICAL_INTRO}", self.statistical_block]
        if self.statistical_notice:
            parts.append(self.statistical_notice)
        parts.extend([COUNTER_INTRO, self.counter_block])
        if self.counter_notice:
            parts.append(self.counter_notice)
        return "\n\n".join(parts)


def compose_report(
    counter_output: str,
    statistical_output: str,
    *,
    max_chars: int | None = None,
) -> ReportMessage:
    """Render the benchmark comment from the two harness outputs.

    Pure: identical inputs give an identical message. With ``max_chars`` unset
    both outputs are embedded in full.
    """
    statistical_text, statistical_notice = _cap(statistical_output, max_chars)
    counter_text, counter_notice = _cap(counter_output, max_chars)
    return ReportMessage(
        preamble=REPORT_PREAMBLE,
        statistical_block=code_block(statistical_text),
        counter_block=code_block(counter_text),
        statistical_notice=statistical_notice,
        counter_notice=counter_notice,
    )


def extract_blocks(body: str) -> list[str]:
    """Return the contents of every fenced block in ``body``, in order."""
    blocks: list[str] = []
    fence: str | None = None
    current: list[str] = []
    for line in body.split("\n"):
        if fence is None:
            match = _FENCE_LINE.match(line)
            if match:
                fence = match.group(1)
                current = []
            continue
        if line == fence:
            blocks.append("\n".join(current))
            fence = None
            continue
        current.append(line)
    return blocks
