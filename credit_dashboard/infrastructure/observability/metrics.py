"""Prometheus metrics for monitoring score distribution, data quality and request latency"""

from prometheus_client import Counter, Histogram

from credit_dashboard.domain.models import RobustRatios

# Scoring metrics
assessment_counter = Counter(
    "credit_assessment_total",
    "Composite eligibility scores produced",
    ["category"],  # Excellent | Good | Fair | Poor
)

cad_assessment_counter = Counter(
    "credit_cad_assessment_total",
    "CAD loan assessments produced",
    ["category"],
)

# Data quality metrics
unreliable_ratio_counter = Counter(
    "credit_unreliable_ratio_total",
    "Ratios flagged unreliable during calculation",
    ["ratio"],
)

validation_issue_counter = Counter(
    "credit_validation_issue_total",
    "Data quality issues found in source statements",
    ["type", "severity"],
)

# Bureau API metrics
bureau_fetch_failures_counter = Counter(
    "bureau_fetch_failures_total",
    "Failed credit bureau API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(category: str) -> None:
    assessment_counter.labels(category=category).inc()


def record_cad_assessment(category: str) -> None:
    cad_assessment_counter.labels(category=category).inc()


def record_ratio_quality(ratios: RobustRatios) -> None:
    """Count unreliable ratios and validation issues for data-quality dashboards"""
    for name in ratios.unreliable():
        unreliable_ratio_counter.labels(ratio=name).inc()

    for issue in ratios.data_quality.issues:
        validation_issue_counter.labels(type=issue.type, severity=issue.severity).inc()
