"""Verification suites — sequential, fail-fast checks against docker and claude."""

from mcpdock.verify.checks import (
    Check,
    CheckOutcome,
    CheckResult,
    CheckSuite,
    SuiteReport,
    SuiteReporter,
)
from mcpdock.verify.suites import BuildSuite, IntegrationSuite, McpSuite

__all__ = [
    "BuildSuite",
    "Check",
    "CheckOutcome",
    "CheckResult",
    "CheckSuite",
    "IntegrationSuite",
    "McpSuite",
    "SuiteReport",
    "SuiteReporter",
]
