"""
Report Line Formatting

DESIGN DECISION: The 0.00 shown for an undisclosed total is chosen
here and only here. TripRecord keeps None; nothing downstream of the
formatter ever sees the substituted value.
"""

from decimal import Decimal

from travelq.models.trip import TripRecord


LINE_TEMPLATE = (
    "Ref Number: {ref_number}. Name: {name}. Purpose: {purpose}. "
    "Destination: {destination}. Duration: {duration} days. Total: ${total}"
)

ZERO_AMOUNT = Decimal("0.00")


def banner(author: str) -> str:
    return f"Written by {author}"


def display_total(trip: TripRecord) -> str:
    """Total with exactly two decimals; an absent total shows as 0.00."""
    total = trip.total if trip.total is not None else ZERO_AMOUNT
    return f"{total:.2f}"


def format_trip_line(trip: TripRecord) -> str:
    """
    One summary line for a trip, English fields only.

    Raises:
        DateFormatError: If either trip date is malformed
    """
    return LINE_TEMPLATE.format(
        ref_number=trip.ref_number,
        name=trip.name,
        purpose=trip.purpose_en,
        destination=trip.destination_en,
        duration=trip.duration_days(),
        total=display_total(trip),
    )
