"""Validation engine running rules over a dataset and scoring the result."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .checks import CHECKS
from .models import Dataset, ValidationIssue, ValidationResult, ValidationRule
from .progress import ProgressReporter
from .rules import get_default_rules
from .scoring import sort_issues, summarize

LOGGER = logging.getLogger("report_scanner.validation")

RULES_PROGRESS_SHARE = 80.0
PROGRESS_SCORING = 90.0
PROGRESS_DONE = 100.0


class ReportValidator:
    def __init__(
        self,
        progress: Optional[ProgressReporter] = None,
        reset_progress: bool = True,
    ) -> None:
        self.progress = progress or ProgressReporter()
        self.reset_progress = reset_progress

    def run_rule(self, rule: ValidationRule, dataset: Dataset) -> List[ValidationIssue]:
        check = CHECKS[rule.kind]
        issues = check(rule, dataset)
        LOGGER.debug("Rule %s produced %d issues", rule.id, len(issues))
        return issues

    def validate(
        self,
        dataset: Dataset,
        rules: Optional[Sequence[ValidationRule]] = None,
    ) -> ValidationResult:
        """Run every enabled rule in order and score the combined issues.

        Without ``rules`` the built-in rule set is used.
        """
        if rules is None:
            rules = get_default_rules()
        active = [rule for rule in rules if rule.enabled]

        self.progress.report(0.0)
        issues: List[ValidationIssue] = []
        for done, rule in enumerate(active, start=1):
            issues.extend(self.run_rule(rule, dataset))
            self.progress.report(done / len(active) * RULES_PROGRESS_SHARE)

        self.progress.report(PROGRESS_SCORING)
        summary = summarize(dataset, issues)
        self.progress.report(PROGRESS_DONE)

        result = ValidationResult(
            summary=summary,
            issues=sort_issues(issues),
            is_valid=summary.error_count == 0,
            processed_at=datetime.now(timezone.utc),
        )
        LOGGER.info(
            "Validated %s: issues=%d errors=%d score=%.2f",
            dataset.file_name,
            summary.total_issues,
            summary.error_count,
            summary.data_quality_score,
        )
        if self.reset_progress:
            self.progress.reset()
        return result


def validate_dataset(
    dataset: Dataset,
    rules: Optional[Sequence[ValidationRule]] = None,
    progress: Optional[ProgressReporter] = None,
) -> ValidationResult:
    return ReportValidator(progress).validate(dataset, rules)
