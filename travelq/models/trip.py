"""
Trip Record Model

One row of the travel-expense disclosure export becomes one TripRecord.
The field names ARE the CSV header names: decoding is a plain
`TripRecord.model_validate(row_dict)`, so a renamed or missing column
surfaces as a validation error on that row instead of shifting values
into the wrong fields.

DESIGN DECISION: Dates stay as the raw strings from the file.
They are parsed only when a duration is asked for, so a bad date fails
the render of that trip, not the decode of the row.

DESIGN DECISION: Amounts are Optional[Decimal]. A blank cell is None,
never 0. Substituting 0.00 is a display concern (see travelq.report).
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from travelq.errors import DateFormatError


DATE_FORMAT = "%Y-%m-%d"

AMOUNT_FIELDS = (
    "airfare",
    "other_transport",
    "lodging",
    "meals",
    "other_expenses",
    "total",
)


class TripRecord(BaseModel):
    """
    A single disclosed trip.

    Every column is required in the header. Amount cells may be empty;
    text cells may be empty strings. Cells are taken as written, with
    no trimming, so a cell of spaces is not an empty amount.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    # Identity and classification
    ref_number: str = Field(..., description="Disclosure reference number")
    disclosure_group: str
    title_en: str
    title_fr: str

    # Party
    name: str = Field(..., description="Traveler name")
    purpose_en: str
    purpose_fr: str

    # Temporal (raw YYYY-MM-DD strings)
    start_date: str
    end_date: str

    # Geographic
    destination_en: str
    destination_fr: str

    # Financial - required columns, nullable cells
    airfare: Optional[Decimal] = Field(...)
    other_transport: Optional[Decimal] = Field(...)
    lodging: Optional[Decimal] = Field(...)
    meals: Optional[Decimal] = Field(...)
    other_expenses: Optional[Decimal] = Field(...)
    total: Optional[Decimal] = Field(..., description="Total trip cost")

    # Free text
    additional_comments_en: str
    additional_comments_fr: str

    # Owning organization
    owner_org: str
    owner_org_title: str

    @field_validator(*AMOUNT_FIELDS, mode="before")
    @classmethod
    def blank_amount_is_absent(cls, v):
        """An empty cell means the amount was not disclosed."""
        if v == "":
            return None
        return v

    def _parse_date(self, field: str) -> date:
        value = getattr(self, field)
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError as e:
            raise DateFormatError(field, value, self.ref_number) from e

    def start_on(self) -> date:
        """Parsed start date. Raises DateFormatError if malformed."""
        return self._parse_date("start_date")

    def end_on(self) -> date:
        """Parsed end date. Raises DateFormatError if malformed."""
        return self._parse_date("end_date")

    def duration_days(self) -> int:
        """
        Trip length in days (end - start).

        Zero for a same-day trip, negative when the end precedes the
        start. Nothing checks the order of the two dates.
        """
        return (self.end_on() - self.start_on()).days


CSV_COLUMNS: tuple[str, ...] = tuple(TripRecord.model_fields)
