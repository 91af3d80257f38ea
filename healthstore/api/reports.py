"""
Lab report API and analysis summaries.

A report's analysis classifies each measured parameter; the summary is
derived from those classifications: counts per bucket, an overall status
and a risk level.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from healthstore.api.base import EntityAPI
from healthstore.domain.models import (
    AnalysisSummary,
    HealthReport,
    ParameterStatus,
    ReportAnalysis,
    ReportParameter,
    RiskLevel,
)
from healthstore.services.results import InvalidRecordError, Result, StoreError
from healthstore.services.routes import REPORTS


def summarize_parameters(
    parameters: Mapping[str, ReportParameter], recommendations: list[str] | None = None
) -> AnalysisSummary:
    """Derive counts, overall status and risk level from parameter classifications."""
    statuses = [parameter.status for parameter in parameters.values()]
    normal = sum(1 for status in statuses if status is ParameterStatus.NORMAL)
    critical = sum(1 for status in statuses if status is ParameterStatus.CRITICAL)
    abnormal = len(statuses) - normal - critical

    if critical:
        overall, risk = "critical", RiskLevel.HIGH
    elif abnormal:
        overall, risk = "attention", RiskLevel.MEDIUM
    else:
        overall, risk = "healthy", RiskLevel.LOW

    return AnalysisSummary(
        normal_count=normal,
        abnormal_count=abnormal,
        critical_count=critical,
        overall_status=overall,
        risk_level=risk,
        recommendations=recommendations or [],
    )


class HealthReportAPI(EntityAPI[HealthReport]):
    kind = REPORTS

    async def attach_analysis(
        self,
        report_id: str,
        parameters: Mapping[str, ReportParameter | dict[str, Any]],
        recommendations: list[str] | None = None,
    ) -> Result[HealthReport, StoreError]:
        """Store a parameter analysis on a report together with its derived summary."""
        try:
            parsed = {
                name: value
                if isinstance(value, ReportParameter)
                else ReportParameter.model_validate(value)
                for name, value in parameters.items()
            }
        except ValidationError as e:
            return Result.err(InvalidRecordError(f"Invalid report parameters: {e}"))
        analysis = ReportAnalysis(
            parameters=parsed, summary=summarize_parameters(parsed, recommendations)
        )
        return await self.update(report_id, {"analysis": analysis.to_record()})
