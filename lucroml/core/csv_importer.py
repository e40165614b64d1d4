"""Catalog CSV import for Lucro ML."""

from __future__ import annotations

import csv
import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from .config import Settings
from .models import ImportResult, ListingType, Product, ProductStatus


class CsvValidationError(Exception):
    """Raised when CSV validation fails."""

    def __init__(self, message: str, missing_headers: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing_headers = missing_headers or []


@dataclass
class CsvRow:
    """Parsed CSV row."""

    row_number: int
    sku: str
    name: str
    category: str
    sale_price: Decimal
    unit_cost: Decimal
    packaging_cost: Decimal
    weight_kg: Decimal
    listing_type: ListingType
    uses_fulfillment: bool
    tax_rate: Decimal
    extra_fixed_cost: Decimal
    return_rate: Decimal
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class CsvImporter:
    """Imports product catalog CSV files with strict schema validation."""

    REQUIRED_HEADERS = [
        "SKU",
        "Name",
        "SalePrice",
        "UnitCost",
    ]

    TRUE_VALUES = ("1", "true", "yes", "sim", "y", "s")

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the importer with settings used for missing columns."""
        self.settings = settings or Settings()
        self.batch_id = ""

    def validate_headers(self, headers: list[str]) -> None:
        """Validate that all required headers are present."""
        cleaned_headers = [h.strip() for h in headers]
        missing = [h for h in self.REQUIRED_HEADERS if h not in cleaned_headers]

        if missing:
            raise CsvValidationError(
                f"Missing required columns: {', '.join(missing)}. "
                f"Required columns are: {', '.join(self.REQUIRED_HEADERS)}",
                missing_headers=missing,
            )

    def parse_decimal(
        self,
        value: str | None,
        row_num: int,
        field_name: str,
        default: Decimal = Decimal("0"),
    ) -> tuple[Decimal, str | None]:
        """Parse a decimal value, returning the value and any error.

        Accepts both ``1234.56`` and Brazilian ``1.234,56`` notation.
        """
        if value is None or value.strip() == "":
            return default, None

        cleaned = value.strip().replace("R$", "").replace(" ", "")
        if "," in cleaned:
            cleaned = cleaned.replace(".", "").replace(",", ".")
        try:
            return Decimal(cleaned), None
        except InvalidOperation:
            return default, f"Row {row_num}: Invalid {field_name} value '{value}', using {default}"

    def parse_row(self, row: dict[str, str], row_number: int) -> CsvRow:
        """Parse a single CSV row."""
        errors: list[str] = []
        warnings: list[str] = []

        def text(key: str) -> str:
            return (row.get(key) or "").strip()

        def number(key: str, default: Decimal = Decimal("0")) -> Decimal:
            value, err = self.parse_decimal(row.get(key), row_number, key, default)
            if err:
                warnings.append(err)
            return value

        sku = text("SKU")
        name = text("Name")
        if not sku:
            errors.append(f"Row {row_number}: SKU is required")
        if not name:
            errors.append(f"Row {row_number}: Name is required")

        sale_price = number("SalePrice")
        if sale_price <= 0:
            errors.append(f"Row {row_number}: SalePrice must be greater than 0")

        unit_cost = number("UnitCost")
        if unit_cost < 0:
            errors.append(f"Row {row_number}: UnitCost cannot be negative")

        listing_type = self.settings.default_listing_type
        if text("ListingType"):
            try:
                listing_type = ListingType.from_string(text("ListingType"))
            except ValueError:
                warnings.append(
                    f"Row {row_number}: Unknown ListingType '{text('ListingType')}', "
                    f"using {listing_type.value}"
                )

        return CsvRow(
            row_number=row_number,
            sku=sku,
            name=name,
            category=text("Category") or "Other",
            sale_price=sale_price,
            unit_cost=unit_cost,
            packaging_cost=number("PackagingCost", self.settings.default_packaging_cost),
            weight_kg=number("WeightKg"),
            listing_type=listing_type,
            uses_fulfillment=text("Fulfillment").lower() in self.TRUE_VALUES,
            tax_rate=number("TaxRate", self.settings.default_tax_rate),
            extra_fixed_cost=number("ExtraFixedCost"),
            return_rate=number("ReturnRate"),
            errors=errors,
            warnings=warnings,
        )

    def preview(self, file_path: str | Path, max_rows: int = 10) -> tuple[list[CsvRow], list[str]]:
        """Preview the first N rows of a CSV file.

        Returns tuple of (rows, validation_errors).
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        rows: list[CsvRow] = []
        validation_errors: list[str] = []

        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)

            if reader.fieldnames is None:
                raise CsvValidationError("CSV file is empty or has no headers")

            try:
                self.validate_headers(list(reader.fieldnames))
            except CsvValidationError as e:
                validation_errors.append(str(e))
                return rows, validation_errors

            for i, row in enumerate(reader, start=2):  # Start at 2 (1-indexed, after header)
                if i > max_rows + 1:
                    break
                parsed = self.parse_row(row, i)
                rows.append(parsed)
                validation_errors.extend(parsed.errors)

        return rows, validation_errors

    def import_file(self, file_path: str | Path) -> tuple[list[Product], ImportResult]:
        """Import a CSV file and return Product objects.

        Returns tuple of (products, import_result).
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        self.batch_id = str(uuid.uuid4())[:8]

        products: list[Product] = []
        result = ImportResult(batch_id=self.batch_id)
        all_errors: list[str] = []
        all_warnings: list[str] = []

        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)

            if reader.fieldnames is None:
                result.errors.append("CSV file is empty or has no headers")
                return products, result

            try:
                self.validate_headers(list(reader.fieldnames))
            except CsvValidationError as e:
                result.errors.append(str(e))
                return products, result

            for row_num, row in enumerate(reader, start=2):
                parsed = self.parse_row(row, row_num)

                if parsed.errors:
                    all_errors.extend(parsed.errors)
                    result.items_skipped += 1
                    continue

                all_warnings.extend(parsed.warnings)
                products.append(
                    Product(
                        id=uuid.uuid4().hex,
                        sku=parsed.sku,
                        name=parsed.name,
                        category=parsed.category,
                        sale_price=parsed.sale_price,
                        unit_cost=parsed.unit_cost,
                        packaging_cost=parsed.packaging_cost,
                        weight_kg=parsed.weight_kg,
                        listing_type=parsed.listing_type,
                        uses_fulfillment=parsed.uses_fulfillment,
                        tax_rate=parsed.tax_rate,
                        extra_fixed_cost=parsed.extra_fixed_cost,
                        return_rate=parsed.return_rate,
                        status=ProductStatus.ACTIVE,
                        created_at=date.today(),
                    )
                )
                result.items_imported += 1

        result.errors = all_errors
        result.warnings = all_warnings
        result.success = len(all_errors) == 0

        return products, result

    def get_required_headers(self) -> list[str]:
        """Return the list of required headers."""
        return self.REQUIRED_HEADERS.copy()
