"""FastAPI application exposing the fiscal engine.

Usage:
    python -m forfettario.main

The data store and the web client are external: callers POST an
already-loaded FiscalSnapshot and receive the derived figures.
"""

from __future__ import annotations

import logging
import sys
from datetime import date

import structlog
import uvicorn
from fastapi import FastAPI

from forfettario.calculators.deadlines import deadline_statuses
from forfettario.calculators.debts import upcoming_payments
from forfettario.calculators.engine import calculate_from_snapshot
from forfettario.calculators.expenses import expense_distribution, tag_goal_progress
from forfettario.config import settings
from forfettario.decoders.ateco import load_seed_codes
from forfettario.schemas.fiscal import AtecoCode, FiscalSnapshot
from forfettario.schemas.stats import DeadlineState, ExpenseGoalRow, ExpenseTagRow, Stats, UpcomingPayment

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)


def _reference_date(snapshot: FiscalSnapshot) -> date:
    """The snapshot's own date, else the server date (read only here)."""
    return snapshot.today or date.today()


# ── FastAPI app ──────────────────────────────────────────────────────

app = FastAPI(
    title="Forfettario API",
    description="Tax and cash-flow forecasting for regime forfettario sole proprietors",
    version="0.1.0",
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "environment": settings.environment}


@app.post("/stats")
async def compute_stats(snapshot: FiscalSnapshot) -> Stats:
    """Derived fiscal figures for the snapshot's view year, rounded to cents."""
    stats = calculate_from_snapshot(snapshot, _reference_date(snapshot), settings.fiscal)
    logger.info(
        "Stats computed: year=%s business_income=%s total_tax=%s",
        snapshot.view_year,
        stats.business_income,
        stats.total_tax_estimate,
    )
    return stats.rounded()


@app.post("/stats/deadlines")
async def compute_deadline_statuses(snapshot: FiscalSnapshot) -> list[DeadlineState]:
    """Fiscal deadlines with their paid / overdue / pending state."""
    today = _reference_date(snapshot)
    stats = calculate_from_snapshot(snapshot, today, settings.fiscal).rounded()
    return deadline_statuses(
        stats.deadlines,
        stats.taxes_paid,
        today,
        tolerance=settings.fiscal.deadline_paid_tolerance,
    )


@app.post("/reports/expenses")
async def expense_report(snapshot: FiscalSnapshot) -> list[ExpenseTagRow]:
    """Expenses of the view year grouped by main tag."""
    return expense_distribution(
        snapshot.transactions,
        snapshot.view_year,
        snapshot.settings.expense_goals,
    )


@app.post("/reports/goals")
async def goal_report(snapshot: FiscalSnapshot) -> list[ExpenseGoalRow]:
    """Spending per tag against the expense budgets, with the previous year."""
    return tag_goal_progress(
        snapshot.transactions,
        snapshot.view_year,
        snapshot.settings.expense_goals,
    )


@app.post("/reports/upcoming")
async def upcoming_report(snapshot: FiscalSnapshot) -> list[UpcomingPayment]:
    """Fixed debt installments due this month."""
    return upcoming_payments(
        snapshot.fixed_debts,
        snapshot.transactions,
        snapshot.view_year,
        _reference_date(snapshot),
    )


@app.get("/ateco/seed")
async def ateco_seed() -> list[AtecoCode]:
    """Catalogue of common forfettario ATECO codes."""
    return load_seed_codes()


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "forfettario.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
