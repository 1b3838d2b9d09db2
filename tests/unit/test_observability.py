"""Unit tests for structured logging and metrics helpers"""

import json
import logging
from prometheus_client import REGISTRY
from credit_dashboard.domain.dataset import load_dataset
from credit_dashboard.domain.ratios import calculate_robust_ratios
from credit_dashboard.infrastructure.observability.logging import CustomJsonFormatter
from credit_dashboard.infrastructure.observability.metrics import record_cad_assessment, record_ratio_quality


def test_json_formatter_adds_service_metadata():
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord("credit", logging.WARNING, __file__, 1, "Rejected input", None, None)
    record.request_id = "req-1"

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "Rejected input"
    assert payload["level"] == "WARNING"
    assert payload["service"] == "credit-dashboard"
    assert payload["request_id"] == "req-1"
    assert "timestamp" in payload


def _sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_record_ratio_quality_counts_unreliable_ratios_and_issues(make_payload):
    ratios = calculate_robust_ratios(load_dataset(make_payload({"Total Assets": 1000})), 2023)
    unreliable_before = _sample("credit_unreliable_ratio_total", ratio="current_ratio")
    issues_before = _sample("credit_validation_issue_total", type="missing_data", severity="high")

    record_ratio_quality(ratios)

    assert _sample("credit_unreliable_ratio_total", ratio="current_ratio") == unreliable_before + 1
    assert _sample("credit_validation_issue_total", type="missing_data", severity="high") == issues_before + 1


def test_record_cad_assessment():
    before = _sample("credit_cad_assessment_total", category="Fair")

    record_cad_assessment("Fair")

    assert _sample("credit_cad_assessment_total", category="Fair") == before + 1
