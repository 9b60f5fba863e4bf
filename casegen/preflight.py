"""Shared structural preflight validation for generation paths."""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .errors import EmptyDomainError, InvalidSpaceError, LimitExceededError


@dataclass(frozen=True)
class PreflightIssue:
    code: str
    message: str
    field: Optional[str] = None
    index: Optional[int] = None


@dataclass
class PreflightReport:
    issues: List[PreflightIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


def validate_generation_preflight(
    space: Any,
    max_params: Optional[int] = None,
    max_values_per_param: Optional[int] = None,
    max_total_values: Optional[int] = None,
) -> PreflightReport:
    """Validates structural generation preconditions without raising.

    Limits set to None are not enforced.
    """
    report = PreflightReport()

    def add_issue(code: str, message: str, field_name: Optional[str] = None, index: Optional[int] = None) -> None:
        report.issues.append(PreflightIssue(code=code, message=message, field=field_name, index=index))

    params = list(space.parameters)
    param_count = len(params)
    if param_count == 0:
        add_issue("no_params", "Input Error: At least 1 parameter is required.", "space.parameters")
        return report
    if max_params is not None and param_count > max_params:
        add_issue(
            "limit_max_params",
            f"Model Safety Violation: Model has {param_count} parameters, exceeding limit of {max_params}.",
            "space.parameters",
        )

    total_values = 0
    for p_idx, param in enumerate(params):
        p_field = f"space.parameters[{p_idx}]"
        value_count = len(param.values)
        total_values += value_count

        if value_count == 0:
            add_issue(
                "empty_domain",
                f"Input Error: Parameter #{p_idx + 1} ('{param.name}') has no values.",
                f"{p_field}.values",
                p_idx,
            )
        if max_values_per_param is not None and value_count > max_values_per_param:
            add_issue(
                "limit_max_values_per_param",
                (
                    f"Model Safety Violation: Parameter '{param.name}' has {value_count} values, "
                    f"exceeding limit of {max_values_per_param}."
                ),
                f"{p_field}.values",
                p_idx,
            )

    if max_total_values is not None and total_values > max_total_values:
        add_issue(
            "limit_max_total_values",
            f"Model Safety Violation: Model has {total_values} total values, exceeding limit of {max_total_values}.",
            "space.parameters",
        )

    return report


def raise_for_report(report: PreflightReport) -> None:
    """Raises the error matching the first issue, structural issues first."""
    if report.ok:
        return
    structural = [i for i in report.issues if not i.code.startswith("limit_")]
    issue = (structural or report.issues)[0]
    if issue.code == "no_params":
        raise InvalidSpaceError(issue.message)
    if issue.code == "empty_domain":
        raise EmptyDomainError(issue.message, index=issue.index)
    raise LimitExceededError(issue.message)
