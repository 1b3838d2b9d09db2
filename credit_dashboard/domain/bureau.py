"""AECB credit bureau report parsing"""

from typing import Any, Mapping

from credit_dashboard.domain.exceptions import UnsupportedInputError
from credit_dashboard.domain.models import (
    BureauReport,
    CreditFacility,
    NegativeInformation,
    PaymentPerformance,
)


def parse_bureau_report(data: Mapping[str, Any]) -> BureauReport:
    """
    Build a BureauReport from the AECB report layout.

    Expected sections: company_info, credit_profile, payment_history,
    credit_utilization, and optionally facility_details, credit_inquiries,
    negative_information, guarantor_information.

    Raises:
        UnsupportedInputError: required sections or fields are missing
    """
    try:
        company = data["company_info"]
        profile = data["credit_profile"]
        history = data["payment_history"]
        performance = history["payment_performance"]
        utilization = data["credit_utilization"]
        inquiries = data.get("credit_inquiries", {})
        negative = data.get("negative_information", {})
        guarantors = data.get("guarantor_information", {})

        return BureauReport(
            company_name=company["company_name"],
            industry=company.get("industry"),
            trade_license=company.get("trade_license"),
            credit_score=int(profile["aecb_score"]),
            risk_grade=str(profile["risk_grade"]),
            payment_performance=PaymentPerformance(
                on_time_payments=float(performance["on_time_payments"]),
                late_payments_30_days=int(performance.get("late_payments_30_days", 0)),
                late_payments_60_days=int(performance.get("late_payments_60_days", 0)),
                late_payments_90_days=int(performance.get("late_payments_90_days", 0)),
                defaults=int(performance.get("defaults", 0)),
            ),
            utilization_ratio=float(utilization["utilization_ratio"]),
            facilities=[
                CreditFacility(
                    facility_type=f["facility_type"],
                    bank=f["bank"],
                    limit=float(f["limit"]),
                    outstanding=float(f["outstanding"]),
                    status=f["status"],
                    days_past_due=int(f.get("days_past_due", 0)),
                )
                for f in data.get("facility_details", [])
            ],
            inquiries_last_12_months=int(inquiries.get("last_12_months", 0)),
            inquiries_last_6_months=int(inquiries.get("last_6_months", 0)),
            negative_information=NegativeInformation(
                bounced_checks=int(negative.get("bounced_checks", 0)),
                legal_cases=int(negative.get("legal_cases", 0)),
                bankruptcy_history=bool(negative.get("bankruptcy_history", False)),
                restructuring_history=bool(negative.get("restructuring_history", False)),
            ),
            personal_guarantors=int(guarantors.get("personal_guarantors", 0)),
            corporate_guarantors=int(guarantors.get("corporate_guarantors", 0)),
        )
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise UnsupportedInputError(f"Invalid bureau report: {e}") from e
