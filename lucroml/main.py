"""Main entry point for Lucro ML."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from lucroml.core.config import Settings, get_config_dir, get_settings
from lucroml.core.models import Campaign, Product, Sale
from lucroml.core.periods import Period
from lucroml.core.profit import ProfitCalculator
from lucroml.core.reports import ReportBuilder
from lucroml.utils.demo_data import generate_demo_data
from lucroml.utils.formatters import format_currency, format_percent

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging."""
    log_dir = get_config_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "lucroml.log"

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lucroml",
        description="Profitability summary for a marketplace store.",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use the built-in demo catalog, sales and campaigns.",
    )
    parser.add_argument(
        "--period",
        choices=[p.value for p in Period if p != Period.CUSTOM],
        default=Period.LAST_30_DAYS.value,
        help="Dashboard period (default: 30d).",
    )
    return parser


def render_summary(
    settings: Settings,
    products: list[Product],
    sales: list[Sale],
    campaigns: list[Campaign],
    period: Period,
    today: date | None = None,
) -> str:
    """Dashboard figures and ABC ranking as plain text."""
    calculator = ProfitCalculator.for_history(settings, sales)
    reports = ReportBuilder(calculator)
    dashboard = reports.dashboard(products, sales, campaigns, period=period, today=today)
    current = dashboard.current

    lines = [
        f"{settings.store_name} - last {period.value}",
        f"  Revenue:       {format_currency(current.revenue)} ({format_percent(dashboard.revenue_change)})",
        f"  Costs:         {format_currency(current.costs)} ({format_percent(dashboard.costs_change)})",
        f"  Net profit:    {format_currency(current.profit)} ({format_percent(dashboard.profit_change)})",
        f"  Margin:        {format_percent(current.margin_percent)}",
        f"  Sales:         {current.sales_count}",
        f"  Average ticket: {format_currency(current.average_ticket)}",
        f"  ROI:           {format_percent(current.roi_percent)}",
        f"  Return rate:   {format_percent(current.return_rate_percent)}",
        "",
        "ABC ranking",
    ]
    for entry in reports.portfolio.classify(products, sales, campaigns):
        lines.append(
            f"  [{entry.abc_class}] {entry.product.sku} {entry.product.name}: "
            f"{format_currency(entry.total_profit)} ({format_percent(entry.cumulative)} cumulative)"
        )

    forecast = reports.revenue_forecast(sales, today)
    lines += [
        "",
        "Next month forecast",
        f"  {format_currency(forecast.pessimistic)} / {format_currency(forecast.realistic)}"
        f" / {format_currency(forecast.optimistic)}",
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Application entry point."""
    args = _build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level)

    logger.info("Starting Lucro ML")
    logger.info(f"Config dir: {get_config_dir()}")

    if not args.demo:
        logger.error("No data source configured; run with --demo to use the demo dataset")
        print("Error: no data to report on. Use --demo for the demo dataset.", file=sys.stderr)
        return 1

    try:
        products, sales, campaigns = generate_demo_data()
        print(render_summary(settings, products, sales, campaigns, Period(args.period)))
    except ValueError as e:
        logger.exception("Failed to build report")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
