"""Decodes IATA Resolution 792 Bar-Coded Boarding Passes (BCBP)."""

# Standard imports
import logging
from dataclasses import dataclass, field
from datetime import datetime

# Project imports
import pbbcbp.errors as err
from pbbcbp.dates import flight_date, issue_date
from pbbcbp.fields import (
    FieldID, REMAINDER, SECTION_IDS, SECURITY_IDS, SPEC, UNIQUE_IDS,
    find_field,
)

logger = logging.getLogger(__name__)

MIN_LENGTH = 60 # Length of the mandatory items of a single leg pass
MAX_LEGS = 4
SECURITY_MARKER = "^"
# Trimmed from field values; ASCII separators such as GS are kept.
WHITESPACE = " \t\n\r\v\f"

@dataclass
class Leg():
    """
    Represents one flight leg of a boarding pass.

    A Leg with every field blank is the empty leg used for unused slots.
    """
    operating_carrier_pnr_code: str = ""
    from_city_airport_code: str = ""
    to_city_airport_code: str = ""
    operating_carrier_designator: str = ""
    flight_number: str = ""
    date_of_flight: str = ""
    compartment_code: str = ""
    seat_number: str = ""
    check_in_sequence_number: str = ""
    passenger_status: str = ""
    airline_numeric_code: str = ""
    document_form_serial_number: str = ""
    selectee_indicator: str = ""
    international_documentation_verification: str = ""
    marketing_carrier_designator: str = ""
    frequent_flyer_airline_designator: str = ""
    frequent_flyer_number: str = ""
    idad_indicator: str = ""
    free_baggage_allowance: str = ""
    fast_track: str = ""
    for_individual_airline_use: str = ""

    def __str__(self):
        return (
            f"{self.date_of_flight} {self.operating_carrier_designator} "
            f"{self.flight_number} {self.from_city_airport_code} → "
            f"{self.to_city_airport_code}"
        )

    def is_empty(self) -> bool:
        """Whether this leg is an unused slot."""
        return self == Leg()


def _empty_legs() -> list[Leg]:
    return [Leg() for _ in range(MAX_LEGS)]


@dataclass
class BoardingPass():
    """
    Represents a decoded Bar-Coded Boarding Pass (BCBP).

    Legs always holds MAX_LEGS slots; slots beyond the number of legs
    encoded are empty Legs. If data was left over after decoding,
    unknown_data holds a non-fatal DecodeError describing it.
    """
    format_code: str = ""
    number_of_legs_encoded: int = 0
    passenger_name: str = ""
    electronic_ticket_indicator: str = ""
    version_number: int = 0
    passenger_description: str = ""
    source_of_check_in: str = ""
    source_of_boarding_pass_issuance: str = ""
    date_of_issue_of_boarding_pass: str = ""
    document_type: str = ""
    airline_designator_of_boarding_pass_issuer: str = ""
    baggage_tag_license_plate_number: str = ""
    first_non_consecutive_baggage_tag_license_plate_number: str = ""
    second_non_consecutive_baggage_tag_license_plate_number: str = ""
    legs: list[Leg] = field(default_factory=_empty_legs)
    type_of_security_data: str = ""
    security_data: str = ""
    bcbp_str: str = field(default="", repr=False, compare=False)
    unknown_data: err.DecodeError | None = field(
        default=None, repr=False, compare=False
    )

    def __str__(self):
        return self.bcbp_str.replace(" ", "·")

    @property
    def flight_legs(self) -> list[Leg]:
        """Returns the legs that are populated."""
        return [leg for leg in self.legs if not leg.is_empty()]

    @classmethod
    def from_str(cls, bcbp_str, pass_dt: datetime | None = None,
        strict: bool = False,
    ):
        """Decodes a BCBP string. See decode()."""
        return decode(bcbp_str, pass_dt=pass_dt, strict=strict)


# Fields assigned to the boarding pass itself, by field ID.
_PASS_ATTRS = {
    FieldID.FORMAT_CODE: 'format_code',
    FieldID.PASSENGER_NAME: 'passenger_name',
    FieldID.ELECTRONIC_TICKET_INDICATOR: 'electronic_ticket_indicator',
    FieldID.PASSENGER_DESCRIPTION: 'passenger_description',
    FieldID.SOURCE_OF_CHECK_IN: 'source_of_check_in',
    FieldID.SOURCE_OF_BOARDING_PASS_ISSUANCE:
        'source_of_boarding_pass_issuance',
    FieldID.DOCUMENT_TYPE: 'document_type',
    FieldID.AIRLINE_DESIGNATOR_OF_BOARDING_PASS_ISSUER:
        'airline_designator_of_boarding_pass_issuer',
    FieldID.BAGGAGE_TAG_LICENSE_PLATE_NUMBER:
        'baggage_tag_license_plate_number',
    FieldID.FIRST_NON_CONSECUTIVE_BAGGAGE_TAG_LICENSE_PLATE_NUMBER:
        'first_non_consecutive_baggage_tag_license_plate_number',
    FieldID.SECOND_NON_CONSECUTIVE_BAGGAGE_TAG_LICENSE_PLATE_NUMBER:
        'second_non_consecutive_baggage_tag_license_plate_number',
    FieldID.TYPE_OF_SECURITY_DATA: 'type_of_security_data',
    FieldID.SECURITY_DATA: 'security_data',
}

# Fields assigned to the current leg, by field ID.
_LEG_ATTRS = {
    FieldID.OPERATING_CARRIER_PNR_CODE: 'operating_carrier_pnr_code',
    FieldID.FROM_CITY_AIRPORT_CODE: 'from_city_airport_code',
    FieldID.TO_CITY_AIRPORT_CODE: 'to_city_airport_code',
    FieldID.OPERATING_CARRIER_DESIGNATOR: 'operating_carrier_designator',
    FieldID.FLIGHT_NUMBER: 'flight_number',
    FieldID.COMPARTMENT_CODE: 'compartment_code',
    FieldID.SEAT_NUMBER: 'seat_number',
    FieldID.CHECK_IN_SEQUENCE_NUMBER: 'check_in_sequence_number',
    FieldID.PASSENGER_STATUS: 'passenger_status',
    FieldID.AIRLINE_NUMERIC_CODE: 'airline_numeric_code',
    FieldID.DOCUMENT_FORM_SERIAL_NUMBER: 'document_form_serial_number',
    FieldID.SELECTEE_INDICATOR: 'selectee_indicator',
    FieldID.INTERNATIONAL_DOCUMENTATION_VERIFICATION:
        'international_documentation_verification',
    FieldID.MARKETING_CARRIER_DESIGNATOR: 'marketing_carrier_designator',
    FieldID.FREQUENT_FLYER_AIRLINE_DESIGNATOR:
        'frequent_flyer_airline_designator',
    FieldID.FREQUENT_FLYER_NUMBER: 'frequent_flyer_number',
    FieldID.IDAD_INDICATOR: 'idad_indicator',
    FieldID.FREE_BAGGAGE_ALLOWANCE: 'free_baggage_allowance',
    FieldID.FAST_TRACK: 'fast_track',
    FieldID.FOR_INDIVIDUAL_AIRLINE_USE: 'for_individual_airline_use',
}


def decode(bcbp_str, pass_dt: datetime | None = None, spec=SPEC,
    strict: bool = False,
) -> BoardingPass:
    """
    Decodes BCBP data into a BoardingPass.

    bcbp_str may be str or bytes. Julian dates are resolved relative to
    the year of pass_dt, or the current year if pass_dt is None.

    Raises a DecodeError on the first fatal error; the partially decoded
    pass is attached to it as boarding_pass. Data left over after the
    security section is reported in BoardingPass.unknown_data, or raised
    if strict is True.
    """
    bcbp_str = _check_preconditions(bcbp_str)
    year = (pass_dt or datetime.now()).year
    decoder = _Decoder(bcbp_str, spec, year)
    try:
        boarding_pass = decoder.walk()
    except err.DecodeError as e:
        e.boarding_pass = decoder.boarding_pass
        raise
    if strict and boarding_pass.unknown_data is not None:
        raise boarding_pass.unknown_data
    return boarding_pass


def _check_preconditions(bcbp_str) -> str:
    """Checks length, character set and format code; returns text."""
    if isinstance(bcbp_str, str):
        raw = bcbp_str.encode('utf-8', errors='surrogatepass')
    else:
        raw = bytes(bcbp_str)
    text = raw.decode('utf-8', errors='replace')

    if len(raw) < MIN_LENGTH:
        raise err.insufficient_data(text, len(raw))

    for i, byte in enumerate(raw):
        if byte > 127:
            char = raw[i:i + 4].decode('utf-8', errors='replace')[0]
            raise err.non_ascii(text, i, char)

    if text[0] != "M":
        raise err.unsupported_boarding_pass(text, text[0])
    return text


class _Decoder():
    """Walks a field specification over one boarding pass."""

    def __init__(self, bcbp_str: str, spec, year: int):
        self.bcbp_str = bcbp_str
        self.spec = spec
        self.year = year
        self.boarding_pass = BoardingPass(bcbp_str=bcbp_str)

    def walk(self) -> BoardingPass:
        """Processes every leg, then the security section."""
        legs_field = find_field(FieldID.NUMBER_OF_LEGS_ENCODED)
        legs_str = self.bcbp_str[1:2]
        if not legs_field.validate(legs_str):
            raise err.invalid_data_format(
                self.bcbp_str, 1, legs_field, legs_str
            )
        leg_count = int(legs_str)
        self.boarding_pass.number_of_legs_encoded = leg_count

        remaining = self.bcbp_str
        pos = 0
        for leg in range(leg_count):
            for item in self.spec:
                # Security items are unique and come after every leg.
                if item.id in SECURITY_IDS:
                    continue
                processed = self.set_field(remaining, item, leg, pos)
                remaining = remaining[processed:]
                pos += processed

        if remaining == "":
            return self.boarding_pass

        # Anything after the legs must be the security section.
        if remaining[0] != SECURITY_MARKER:
            raise err.invalid_data_format(
                self.bcbp_str, pos,
                find_field(FieldID.BEGINNING_OF_SECURITY_DATA),
                remaining[0],
            )
        for item in self.spec:
            if item.id not in SECURITY_IDS:
                continue
            processed = self.set_field(remaining, item, 0, pos)
            remaining = remaining[processed:]
            pos += processed

        if remaining != "":
            logger.debug("%d unprocessed character(s) at %d",
                len(remaining), pos)
            self.boarding_pass.unknown_data = err.unknown_data(
                self.bcbp_str, pos, remaining
            )
        return self.boarding_pass

    def set_field(self, s: str, item, leg: int, pos: int) -> int:
        """
        Validates and stores the field at the start of s.

        s is the unprocessed data (or the unprocessed part of the
        enclosing sub-section) and pos is its offset in the full BCBP.
        Returns the number of characters consumed, including those of
        any sub-section the field introduces.
        """
        # Unique items are only read once.
        if leg > 0 and item.id in UNIQUE_IDS:
            return 0

        if item.length == REMAINDER:
            item_len = len(s)
        else:
            item_len = item.length
            if item_len > len(s):
                raise err.unexpected_end_of_input(
                    self.bcbp_str, pos, item, s, item_len
                )

        raw = s[:item_len]
        if not item.validate(raw):
            raise err.invalid_data_format(self.bcbp_str, pos, item, raw)
        val = raw.strip(WHITESPACE)
        try:
            self._assign(item.id, val, leg)
        except (OverflowError, ValueError):
            # Julian date outside the range of datetime.date
            raise err.invalid_data_format(
                self.bcbp_str, pos, item, raw
            ) from None

        if not item.is_section:
            return item_len

        if item.id not in SECTION_IDS:
            raise err.malformed_spec(self.bcbp_str, pos, item)
        try:
            section_len = int(val, 16)
        except ValueError:
            raise err.invalid_data_format(
                self.bcbp_str, pos, item, val
            ) from None

        rest = s[item_len:]
        if section_len > len(rest):
            raise err.unexpected_end_of_input(
                self.bcbp_str, pos + item_len, item, rest, section_len
            )
        logger.debug("%s: %d character sub-section at %d (leg %d)",
            item.description, section_len, pos + item_len, leg)

        section = rest[:section_len]
        for sub_item in item.children:
            # Trailing conditional items may be absent.
            if section == "":
                break
            processed = self.set_field(section, sub_item, leg, pos + item_len)
            item_len += processed
            section = section[processed:]
        return item_len

    def _assign(self, field_id: FieldID, val: str, leg: int) -> None:
        """Assigns a trimmed value to the boarding pass or current leg."""
        bp = self.boarding_pass
        match field_id:
            case FieldID.DATE_OF_FLIGHT:
                bp.legs[leg].date_of_flight = (
                    flight_date(int(val), self.year).isoformat()
                )
            case FieldID.DATE_OF_ISSUE_OF_BOARDING_PASS:
                d = issue_date(val, self.year)
                bp.date_of_issue_of_boarding_pass = (
                    "" if d is None else d.isoformat()
                )
            case FieldID.VERSION_NUMBER:
                bp.version_number = int(val)
            case _ if field_id in _LEG_ATTRS:
                setattr(bp.legs[leg], _LEG_ATTRS[field_id], val)
            case _ if field_id in _PASS_ATTRS:
                setattr(bp, _PASS_ATTRS[field_id], val)
