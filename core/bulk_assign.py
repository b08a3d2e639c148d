from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from core.deck import CATEGORIES, DeckState, Record, category_label, load_category
from core.table_loader import TableLoadResult, load_table

logger = logging.getLogger(__name__)

# Matched as case-insensitive substrings of the file name, in category order.
CATEGORY_MATCHES: Dict[str, Tuple[str, ...]] = {
    "characters": ("characters", "character"),
    "items": ("items", "item"),
    "locations": ("locations", "location"),
    "quests": ("quests", "quest"),
}
ACCEPTED_EXTENSION = ".csv"


@dataclass
class BulkUploadReport:
    tables: Dict[str, Tuple[str, List[Record]]] = field(default_factory=dict)
    assignments: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def status(self) -> str:
        if self.message:
            return self.message
        parts: List[str] = []
        if self.assignments:
            n = len(self.assignments)
            parts.append(f"Loaded {n} file{'' if n == 1 else 's'}: {', '.join(self.assignments)}")
        if self.skipped:
            parts.append(f"Skipped (no slots left): {', '.join(self.skipped)}")
        if self.failures:
            parts.append(f"Failed to parse: {', '.join(self.failures)}")
        return " | ".join(parts) or "No files were processed."


def detect_category(filename: str) -> Optional[str]:
    """
    Return the first category whose name (plural or singular) appears in
    the file name, or None.
    Example:
        detect_category("Quest_Board.CSV") -> "quests"
    """
    lower = filename.lower()
    for category in CATEGORIES:
        if any(token in lower for token in CATEGORY_MATCHES[category]):
            return category
    return None


def assign_tables(results: Sequence[TableLoadResult]) -> BulkUploadReport:
    """Assign parsed files to categories by name, falling back to free slots."""
    report = BulkUploadReport()
    matched_counts: Dict[str, int] = {}
    unmatched: List[TableLoadResult] = []

    for res in results:
        if not res.ok:
            report.failures.append(res.name)
            continue
        category = detect_category(res.name)
        if category is None:
            unmatched.append(res)
            continue
        prev = matched_counts.get(category, 0)
        matched_counts[category] = prev + 1
        report.tables[category] = (res.name, res.records)
        note = " (overrides previous)" if prev else ""
        report.assignments.append(f"{res.name} → {category_label(category)}{note}")

    fallback = [c for c in CATEGORIES if c not in report.tables]
    for res in unmatched:
        if not fallback:
            report.skipped.append(res.name)
            continue
        category = fallback.pop(0)
        report.tables[category] = (res.name, res.records)
        report.assignments.append(f"{res.name} → {category_label(category)} (default)")

    logger.info("Bulk assignment: %s", report.status)
    return report


def bulk_upload(files: Iterable[Tuple[str, bytes]]) -> BulkUploadReport:
    """Parse every CSV in (name, bytes) pairs and assign them to categories."""
    csv_files = [(name, data) for name, data in files if name.lower().endswith(ACCEPTED_EXTENSION)]
    if not csv_files:
        return BulkUploadReport(message="No CSV files selected.")
    return assign_tables([load_table(name, data) for name, data in csv_files])


def apply_report(state: DeckState, report: BulkUploadReport) -> None:
    for category in CATEGORIES:
        if category in report.tables:
            source, records = report.tables[category]
            load_category(state, category, records, source=source)
