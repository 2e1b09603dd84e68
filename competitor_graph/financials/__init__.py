"""
Financial metadata lookup and attachment.

Financial enrichment is optional: a missing table, a missing entry or a
missing year all degrade to absent values rather than errors.
"""

from competitor_graph.financials.lookup import (
    FinancialTable,
    attach_financials,
    latest_snapshot,
    load_financial_table,
    snapshot_for_year,
)

__all__ = [
    "FinancialTable",
    "attach_financials",
    "latest_snapshot",
    "load_financial_table",
    "snapshot_for_year",
]
