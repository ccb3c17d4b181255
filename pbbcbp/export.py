"""Export decoded boarding passes as dicts, JSON, or table rows."""

# Standard imports
import dataclasses
import json

# Project imports
from pbbcbp.boarding_pass import BoardingPass, Leg

# Keys always present in exported data, even when blank.
_REQUIRED_PASS_KEYS = (
    'format_code',
    'number_of_legs_encoded',
    'passenger_name',
    'electronic_ticket_indicator',
)
_REQUIRED_LEG_KEYS = (
    'operating_carrier_pnr_code',
    'from_city_airport_code',
    'to_city_airport_code',
    'operating_carrier_designator',
    'flight_number',
    'date_of_flight',
    'compartment_code',
    'seat_number',
    'check_in_sequence_number',
    'passenger_status',
)
_EXCLUDED_PASS_KEYS = ('bcbp_str', 'unknown_data')

LEG_HEADERS = [
    "Leg", "Date", "Airline", "Flight", "Orig", "Dest", "Class", "Seat",
    "Seq", "Status",
]

def to_dict(bp: BoardingPass) -> dict:
    """
    Converts a BoardingPass into a dict.

    Empty legs are omitted, as are blank optional fields.
    """
    data = {}
    for f in dataclasses.fields(bp):
        if f.name in _EXCLUDED_PASS_KEYS:
            continue
        if f.name == 'legs':
            data['legs'] = [leg_to_dict(leg) for leg in bp.flight_legs]
            continue
        value = getattr(bp, f.name)
        if f.name in _REQUIRED_PASS_KEYS or value:
            data[f.name] = value
    return data

def leg_to_dict(leg: Leg) -> dict:
    """Converts a Leg into a dict, omitting blank optional fields."""
    return {
        k: v for k, v in dataclasses.asdict(leg).items()
        if k in _REQUIRED_LEG_KEYS or v
    }

def to_json(bp: BoardingPass, indent: int | None = 2) -> str:
    """Serializes a BoardingPass as JSON."""
    return json.dumps(to_dict(bp), indent=indent)

def leg_rows(bp: BoardingPass) -> list[list]:
    """Creates one table row per populated leg (see LEG_HEADERS)."""
    return [
        [
            i + 1,
            leg.date_of_flight,
            leg.operating_carrier_designator,
            leg.flight_number,
            leg.from_city_airport_code,
            leg.to_city_airport_code,
            leg.compartment_code,
            leg.seat_number,
            leg.check_in_sequence_number,
            leg.passenger_status,
        ]
        for i, leg in enumerate(bp.flight_legs)
    ]
