"""Financial dataset construction and fact lookup"""

import logging
import math
from dataclasses import asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple

from credit_dashboard.domain.exceptions import MissingDatasetError, UnsupportedInputError
from credit_dashboard.domain.models import Dataset, FinancialFact, STATEMENTS

logger = logging.getLogger(__name__)


def load_dataset(payload: Mapping[str, Any] | None) -> Dataset:
    """
    Build an immutable dataset from a raw statement mapping.

    The payload maps statement names to lists of fact dicts
    (field_name, value, currency, year, confidence_score). Keys that are not
    statement names (company metadata etc.) are ignored.

    Raises:
        MissingDatasetError: payload is absent or has no statement facts
        UnsupportedInputError: a statement or fact has the wrong shape
    """
    if payload is None:
        raise MissingDatasetError("No financial dataset supplied")
    if not isinstance(payload, Mapping):
        raise UnsupportedInputError(f"Dataset must be a mapping, got {type(payload).__name__}")

    dataset: Dict[str, Tuple[FinancialFact, ...]] = {}
    for statement, items in payload.items():
        if statement not in STATEMENTS:
            logger.debug("Ignoring non-statement key %s", statement)
            continue
        if not isinstance(items, (list, tuple)):
            raise UnsupportedInputError(f"{statement} must be a list of facts")
        dataset[statement] = tuple(_parse_fact(statement, item) for item in items)

    if not any(dataset.values()):
        raise MissingDatasetError("Dataset contains no financial facts")

    return dataset


def _parse_fact(statement: str, item: Any) -> FinancialFact:
    if isinstance(item, FinancialFact):
        return item
    try:
        return FinancialFact(
            field_name=str(item["field_name"]),
            value=float(item["value"]),
            currency=str(item.get("currency", "AED")),
            year=int(item["year"]),
            confidence_score=float(item.get("confidence_score", 1.0)),
        )
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise UnsupportedInputError(f"Invalid fact in {statement}: {e}") from e


def get_value(dataset: Dataset, statement: str, field_name: str, year: int) -> float:
    """First matching fact value for (statement, field, year); 0 when absent"""
    for fact in dataset.get(statement, ()):
        if fact.field_name == field_name and fact.year == year:
            if math.isnan(fact.value):
                return 0.0
            return fact.value
    return 0.0


def available_years(dataset: Dataset) -> List[int]:
    """Sorted distinct years across all statements"""
    return sorted({fact.year for facts in dataset.values() for fact in facts})


def resolve_year(dataset: Dataset, year: Optional[int] = None) -> int:
    """Requested year, or the latest year present in the dataset"""
    if year is not None:
        return year
    years = available_years(dataset)
    if not years:
        raise MissingDatasetError("Dataset contains no financial facts")
    return years[-1]


def previous_year(dataset: Dataset, year: int) -> Optional[int]:
    """Latest year in the dataset before year, if any"""
    earlier = [y for y in available_years(dataset) if y < year]
    return earlier[-1] if earlier else None


def dump_dataset(dataset: Dataset) -> Dict[str, List[Dict[str, Any]]]:
    """Plain-dict form of a dataset, the inverse of load_dataset"""
    return {statement: [asdict(fact) for fact in facts] for statement, facts in dataset.items()}
