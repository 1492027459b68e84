"""Fail-fast check sequences.

A :class:`CheckSuite` runs its checks strictly in order and stops at the
first failure.  Its teardown runs only after a fully passing run; a failed
run leaves whatever the earlier checks created in place.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel

from mcpdock.utils.telemetry import ATTR_CHECK, ATTR_CHECK_PASSED, ATTR_SUITE, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class CheckOutcome(BaseModel):
    """What a single check function returns."""

    passed: bool
    detail: str = ""

    @classmethod
    def ok(cls, detail: str = "") -> CheckOutcome:
        return cls(passed=True, detail=detail)

    @classmethod
    def fail(cls, detail: str = "") -> CheckOutcome:
        return cls(passed=False, detail=detail)


class CheckResult(BaseModel):
    """A check outcome labelled with the check's title."""

    title: str
    passed: bool
    detail: str = ""


class SuiteReport(BaseModel):
    """Results of one suite run, in execution order."""

    name: str
    results: list[CheckResult] = []
    total: int = 0

    @property
    def passed(self) -> bool:
        return len(self.results) == self.total and all(r.passed for r in self.results)

    @property
    def failed_check(self) -> CheckResult | None:
        return next((r for r in self.results if not r.passed), None)


@dataclass(frozen=True)
class Check:
    """A titled coroutine function producing a :class:`CheckOutcome`."""

    title: str
    run: Callable[[], Awaitable[CheckOutcome]]


class SuiteReporter(Protocol):
    """Receives progress while a suite runs."""

    def suite_started(self, name: str, total: int) -> None: ...
    def check_started(self, index: int, check: Check) -> None: ...
    def check_finished(self, index: int, result: CheckResult) -> None: ...
    def suite_finished(self, report: SuiteReport) -> None: ...


class CheckSuite:
    """An ordered, fail-fast sequence of checks."""

    def __init__(
        self,
        name: str,
        checks: Sequence[Check],
        *,
        teardown: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self.name = name
        self.checks = list(checks)
        self._teardown = teardown

    async def run(self, reporter: SuiteReporter | None = None) -> SuiteReport:
        report = SuiteReport(name=self.name, total=len(self.checks))
        if reporter:
            reporter.suite_started(self.name, len(self.checks))

        for index, check in enumerate(self.checks, start=1):
            if reporter:
                reporter.check_started(index, check)
            result = await self._run_check(check)
            report.results.append(result)
            if reporter:
                reporter.check_finished(index, result)
            if not result.passed:
                logger.info("Suite %s stopped at check %d: %s", self.name, index, check.title)
                break

        if report.passed and self._teardown is not None:
            await self._teardown()

        if reporter:
            reporter.suite_finished(report)
        return report

    async def _run_check(self, check: Check) -> CheckResult:
        with _tracer.start_as_current_span("verify.check") as span:
            span.set_attribute(ATTR_SUITE, self.name)
            span.set_attribute(ATTR_CHECK, check.title)
            try:
                outcome = await check.run()
            except Exception as exc:
                logger.debug("Check %r raised", check.title, exc_info=True)
                outcome = CheckOutcome.fail(str(exc) or type(exc).__name__)
            span.set_attribute(ATTR_CHECK_PASSED, outcome.passed)
        return CheckResult(title=check.title, passed=outcome.passed, detail=outcome.detail)
