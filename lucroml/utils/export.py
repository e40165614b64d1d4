"""Export functionality for Lucro ML."""

from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

import pandas as pd
from openpyxl.utils import get_column_letter

from lucroml.core.models import AbcEntry, IncomeStatement, Product, ProfitBreakdown, Sale


class Exporter:
    """Exports report data to various formats."""

    @staticmethod
    def breakdowns_to_dict(
        breakdowns: Iterable[tuple[Sale, ProfitBreakdown]],
        products: list[Product],
    ) -> list[dict[str, Any]]:
        """Convert per-sale breakdowns to dictionaries for export."""
        by_id = {p.id: p for p in products}
        rows = []
        for sale, b in breakdowns:
            product = by_id.get(sale.product_id)
            rows.append(
                {
                    "Date": sale.sale_date.isoformat(),
                    "SKU": product.sku if product else "",
                    "Product": product.name if product else "",
                    "Quantity": sale.quantity,
                    "Unit Price": float(sale.unit_price),
                    "Gross Revenue": float(b.gross_revenue),
                    "Percentage Fee": float(b.percentage_fee),
                    "Fixed Fee": float(b.fixed_fee),
                    "Fulfillment Fee": float(b.fulfillment_fee),
                    "Tax": float(b.tax),
                    "Product Cost": float(b.product_cost),
                    "Fixed Costs": float(b.fixed_costs),
                    "Shipping": float(b.shipping_cost),
                    "Returns": float(b.return_cost),
                    "Ads": float(b.ad_cost),
                    "Total Cost": float(b.total_cost),
                    "Net Profit": float(b.net_profit),
                    "Margin %": round(float(b.margin_percent), 2),
                    "Returned": "Yes" if sale.returned else "No",
                }
            )
        return rows

    @staticmethod
    def abc_to_dict(entries: list[AbcEntry]) -> list[dict[str, Any]]:
        """Convert the ABC ranking to dictionaries for export."""
        return [
            {
                "Rank": rank,
                "SKU": e.product.sku,
                "Product": e.product.name,
                "Category": e.product.category,
                "Total Profit": float(e.total_profit),
                "Share %": round(float(e.percent), 2),
                "Cumulative %": round(float(e.cumulative), 2),
                "Class": e.abc_class,
            }
            for rank, e in enumerate(entries, start=1)
        ]

    @staticmethod
    def income_statement_to_dict(stmt: IncomeStatement) -> list[dict[str, Any]]:
        """Convert an income statement to one row per line item."""
        lines = [
            ("Gross revenue", stmt.gross_revenue),
            ("(-) Returns", stmt.returns),
            ("Net revenue", stmt.net_revenue),
            ("(-) Cost of goods", stmt.cost_of_goods),
            ("Gross profit", stmt.gross_profit),
            ("(-) Marketplace fees", stmt.marketplace_fees),
            ("(-) Shipping", stmt.shipping),
            ("(-) Taxes", stmt.taxes),
            ("(-) Advertising", stmt.advertising),
            ("(-) Packaging", stmt.packaging),
            ("Net profit", stmt.net_profit),
        ]
        rows = [{"Line": name, "Amount": float(amount)} for name, amount in lines]
        rows.append({"Line": "Net margin %", "Amount": round(float(stmt.margin_percent), 2)})
        return rows

    @staticmethod
    def export_to_csv(rows: list[dict[str, Any]], file_path: str | Path) -> None:
        """Export rows to a semicolon separated CSV that spreadsheet apps open in pt-BR."""
        if not rows:
            return

        path = Path(file_path)
        # BOM so Excel detects UTF-8
        with open(path, "w", newline="", encoding="utf-8-sig") as f:
            writer = csv.DictWriter(
                f, fieldnames=list(rows[0].keys()), delimiter=";", quoting=csv.QUOTE_ALL
            )
            writer.writeheader()
            writer.writerows(rows)

    @staticmethod
    def export_to_xlsx(
        rows: list[dict[str, Any]],
        file_path: str | Path,
        sheet_name: str = "Report",
    ) -> None:
        """Export rows to Excel."""
        if not rows:
            return

        df = pd.DataFrame(rows)

        path = Path(file_path)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=sheet_name)

            # Auto-adjust column widths
            worksheet = writer.sheets[sheet_name]
            for i, col in enumerate(df.columns, start=1):
                max_length = max(df[col].astype(str).apply(len).max(), len(col))
                worksheet.column_dimensions[get_column_letter(i)].width = min(max_length + 2, 50)

    @classmethod
    def generate_filename(cls, report: str, extension: str) -> str:
        """Generate a timestamped filename for export."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"lucroml_{report.lower()}_{timestamp}.{extension}"
