"""
Field specification for IATA Resolution 792 Bar Coded Boarding Passes.

The specification is a tree of Field descriptors. Top-level fields are
walked in order for each flight leg; a field with children introduces a
sub-section whose length (in hexadecimal) is the field's own value.
"""

# Standard imports
import re
from dataclasses import dataclass
from enum import Enum, auto

REMAINDER = -1 # Length of fields that consume the rest of their section


class FieldID(Enum):
    """Identifies the semantic role of a BCBP field."""
    FORMAT_CODE = auto()
    NUMBER_OF_LEGS_ENCODED = auto()
    PASSENGER_NAME = auto()
    ELECTRONIC_TICKET_INDICATOR = auto()
    OPERATING_CARRIER_PNR_CODE = auto()
    FROM_CITY_AIRPORT_CODE = auto()
    TO_CITY_AIRPORT_CODE = auto()
    OPERATING_CARRIER_DESIGNATOR = auto()
    FLIGHT_NUMBER = auto()
    DATE_OF_FLIGHT = auto()
    COMPARTMENT_CODE = auto()
    SEAT_NUMBER = auto()
    CHECK_IN_SEQUENCE_NUMBER = auto()
    PASSENGER_STATUS = auto()
    FIELD_SIZE_OF_VARIABLE_SIZE_FIELD = auto()
    BEGINNING_OF_VERSION_NUMBER = auto()
    VERSION_NUMBER = auto()
    FIELD_SIZE_OF_STRUCTURED_MESSAGE_UNIQUE = auto()
    PASSENGER_DESCRIPTION = auto()
    SOURCE_OF_CHECK_IN = auto()
    SOURCE_OF_BOARDING_PASS_ISSUANCE = auto()
    DATE_OF_ISSUE_OF_BOARDING_PASS = auto()
    DOCUMENT_TYPE = auto()
    AIRLINE_DESIGNATOR_OF_BOARDING_PASS_ISSUER = auto()
    BAGGAGE_TAG_LICENSE_PLATE_NUMBER = auto()
    FIRST_NON_CONSECUTIVE_BAGGAGE_TAG_LICENSE_PLATE_NUMBER = auto()
    SECOND_NON_CONSECUTIVE_BAGGAGE_TAG_LICENSE_PLATE_NUMBER = auto()
    FIELD_SIZE_OF_STRUCTURED_MESSAGE_REPEATED = auto()
    AIRLINE_NUMERIC_CODE = auto()
    DOCUMENT_FORM_SERIAL_NUMBER = auto()
    SELECTEE_INDICATOR = auto()
    INTERNATIONAL_DOCUMENTATION_VERIFICATION = auto()
    MARKETING_CARRIER_DESIGNATOR = auto()
    FREQUENT_FLYER_AIRLINE_DESIGNATOR = auto()
    FREQUENT_FLYER_NUMBER = auto()
    IDAD_INDICATOR = auto()
    FREE_BAGGAGE_ALLOWANCE = auto()
    FAST_TRACK = auto()
    FOR_INDIVIDUAL_AIRLINE_USE = auto()
    BEGINNING_OF_SECURITY_DATA = auto()
    TYPE_OF_SECURITY_DATA = auto()
    LENGTH_OF_SECURITY_DATA = auto()
    SECURITY_DATA = auto()


# Only these fields may introduce a sub-section.
SECTION_IDS = frozenset({
    FieldID.FIELD_SIZE_OF_VARIABLE_SIZE_FIELD,
    FieldID.FIELD_SIZE_OF_STRUCTURED_MESSAGE_UNIQUE,
    FieldID.FIELD_SIZE_OF_STRUCTURED_MESSAGE_REPEATED,
    FieldID.LENGTH_OF_SECURITY_DATA,
})

# Fields that appear once per boarding pass, regardless of leg count.
UNIQUE_IDS = frozenset({
    FieldID.FORMAT_CODE,
    FieldID.NUMBER_OF_LEGS_ENCODED,
    FieldID.PASSENGER_NAME,
    FieldID.ELECTRONIC_TICKET_INDICATOR,
    FieldID.BEGINNING_OF_VERSION_NUMBER,
    FieldID.VERSION_NUMBER,
    FieldID.FIELD_SIZE_OF_STRUCTURED_MESSAGE_UNIQUE,
    FieldID.PASSENGER_DESCRIPTION,
    FieldID.SOURCE_OF_CHECK_IN,
    FieldID.SOURCE_OF_BOARDING_PASS_ISSUANCE,
    FieldID.DATE_OF_ISSUE_OF_BOARDING_PASS,
    FieldID.DOCUMENT_TYPE,
    FieldID.AIRLINE_DESIGNATOR_OF_BOARDING_PASS_ISSUER,
    FieldID.BAGGAGE_TAG_LICENSE_PLATE_NUMBER,
    FieldID.FIRST_NON_CONSECUTIVE_BAGGAGE_TAG_LICENSE_PLATE_NUMBER,
    FieldID.SECOND_NON_CONSECUTIVE_BAGGAGE_TAG_LICENSE_PLATE_NUMBER,
})

# Security fields are processed once, after all legs.
SECURITY_IDS = frozenset({
    FieldID.BEGINNING_OF_SECURITY_DATA,
    FieldID.TYPE_OF_SECURITY_DATA,
    FieldID.LENGTH_OF_SECURITY_DATA,
    FieldID.SECURITY_DATA,
})


@dataclass(frozen=True)
class Field():
    """
    Describes one field of a BCBP.

    A field with children is a section header: its value is the
    hexadecimal length of the sub-section holding the children.
    """
    id: FieldID
    description: str
    length: int
    pattern: re.Pattern
    format: str
    children: tuple = ()

    @property
    def is_section(self) -> bool:
        """Whether this field introduces a sub-section."""
        return len(self.children) > 0

    def validate(self, value: str) -> bool:
        """Checks whether value matches the field's format."""
        return self.pattern.fullmatch(value) is not None


def make_field(field_id, description, length, regex, fmt, children=()):
    """Creates a Field, compiling its pattern."""
    return Field(
        id=field_id,
        description=description,
        length=length,
        pattern=re.compile(regex),
        format=fmt,
        children=tuple(children),
    )


# Patterns shared by several fields.
_JULIAN_DAY = r"00[1-9]|0[1-9][0-9]|[12][0-9]{2}|3[0-5][0-9]|36[0-6]"
_HEX = r"[0-9a-fA-F]{2}"
_HEX_FORMAT = "2 hexadecimal characters"
_DESIGNATOR = r"[a-zA-Z0-9]{2,3} *"
_DESIGNATOR_FORMAT = (
    "2 or 3 alphanumeric characters, left justified with trailing spaces"
)
_ANY = r"(?s).*"

_UNIQUE_CONDITIONAL = (
    make_field(FieldID.PASSENGER_DESCRIPTION,
        "Passenger Description", 1,
        r"[a-zA-Z0-9 ]",
        "1 alphanumeric character or a space",
    ),
    make_field(FieldID.SOURCE_OF_CHECK_IN,
        "Source of check-in", 1,
        r"(?i)[WKXRMOTVA ]",
        "one of W, K, X, R, M, O, T, V, A or a space",
    ),
    make_field(FieldID.SOURCE_OF_BOARDING_PASS_ISSUANCE,
        "Source of Boarding Pass Issuance", 1,
        r"(?i)[WKXRMOTV ]",
        "one of W, K, X, R, M, O, T, V or a space",
    ),
    make_field(FieldID.DATE_OF_ISSUE_OF_BOARDING_PASS,
        "Date of Issue of Boarding Pass (Julian Date)", 4,
        rf"[0-9](?:{_JULIAN_DAY})| {{4}}",
        "the last digit of the year followed by a day of year (001-366), "
        "or 4 spaces",
    ),
    make_field(FieldID.DOCUMENT_TYPE,
        "Document Type", 1,
        r"[bBiI]",
        "B (boarding pass) or I (itinerary receipt)",
    ),
    make_field(FieldID.AIRLINE_DESIGNATOR_OF_BOARDING_PASS_ISSUER,
        "Airline Designator of boarding pass issuer", 3,
        rf"{_DESIGNATOR}| {{3}}",
        f"{_DESIGNATOR_FORMAT}, or 3 spaces",
    ),
    make_field(FieldID.BAGGAGE_TAG_LICENSE_PLATE_NUMBER,
        "Baggage Tag License Plate Number(s)", 13,
        r"[0-2][0-9]{12}| {13}",
        "a digit 0-2 followed by 12 digits, or 13 spaces",
    ),
    make_field(FieldID.FIRST_NON_CONSECUTIVE_BAGGAGE_TAG_LICENSE_PLATE_NUMBER,
        "1st Non-Consecutive Baggage Tag License Plate Number", 13,
        r"[0-2][0-9]{12}| {13}",
        "a digit 0-2 followed by 12 digits, or 13 spaces",
    ),
    make_field(FieldID.SECOND_NON_CONSECUTIVE_BAGGAGE_TAG_LICENSE_PLATE_NUMBER,
        "2nd Non-Consecutive Baggage Tag License Plate Number", 13,
        r"[0-2][0-9]{12}| {13}",
        "a digit 0-2 followed by 12 digits, or 13 spaces",
    ),
)

_REPEATED_CONDITIONAL = (
    make_field(FieldID.AIRLINE_NUMERIC_CODE,
        "Airline Numeric Code", 3,
        r"[0-9]{3}| {3}",
        "3 digits, or 3 spaces",
    ),
    make_field(FieldID.DOCUMENT_FORM_SERIAL_NUMBER,
        "Document Form/Serial Number", 10,
        r"[a-zA-Z0-9]{10}| {10}",
        "10 alphanumeric characters, or 10 spaces",
    ),
    make_field(FieldID.SELECTEE_INDICATOR,
        "Selectee Indicator", 1,
        r"[0-2 ]",
        "0, 1, 2 or a space",
    ),
    make_field(FieldID.INTERNATIONAL_DOCUMENTATION_VERIFICATION,
        "International Documentation Verification", 1,
        r"[0-2 ]",
        "0, 1, 2 or a space",
    ),
    make_field(FieldID.MARKETING_CARRIER_DESIGNATOR,
        "Marketing Carrier Designator", 3,
        rf"{_DESIGNATOR}| {{3}}",
        f"{_DESIGNATOR_FORMAT}, or 3 spaces",
    ),
    make_field(FieldID.FREQUENT_FLYER_AIRLINE_DESIGNATOR,
        "Frequent Flyer Airline Designator", 3,
        rf"{_DESIGNATOR}| {{3}}",
        f"{_DESIGNATOR_FORMAT}, or 3 spaces",
    ),
    make_field(FieldID.FREQUENT_FLYER_NUMBER,
        "Frequent Flyer Number", 16,
        r"[a-zA-Z0-9]+ *| {16}",
        "alphanumeric characters, left justified with trailing spaces",
    ),
    make_field(FieldID.IDAD_INDICATOR,
        "ID/AD Indicator", 1,
        r"[a-zA-Z0-9 ]",
        "1 alphanumeric character or a space",
    ),
    make_field(FieldID.FREE_BAGGAGE_ALLOWANCE,
        "Free Baggage Allowance", 3,
        r"[0-9]{2}[kKlL]|[0-9](?i:PC)| {3}",
        "2 digits followed by K or L, 1 digit followed by PC, or 3 spaces",
    ),
    make_field(FieldID.FAST_TRACK,
        "Fast Track", 1,
        r"[yYnN ]",
        "Y, N or a space",
    ),
)

_VARIABLE_SIZE_FIELD = (
    make_field(FieldID.BEGINNING_OF_VERSION_NUMBER,
        "Beginning of version number", 1,
        r">",
        '">"',
    ),
    make_field(FieldID.VERSION_NUMBER,
        "Version Number", 1,
        r"[1-8]",
        "a digit between 1 and 8",
    ),
    make_field(FieldID.FIELD_SIZE_OF_STRUCTURED_MESSAGE_UNIQUE,
        "Field Size of following structured message - unique", 2,
        _HEX, _HEX_FORMAT,
        children=_UNIQUE_CONDITIONAL,
    ),
    make_field(FieldID.FIELD_SIZE_OF_STRUCTURED_MESSAGE_REPEATED,
        "Field Size of following structured message - repeated", 2,
        _HEX, _HEX_FORMAT,
        children=_REPEATED_CONDITIONAL,
    ),
    make_field(FieldID.FOR_INDIVIDUAL_AIRLINE_USE,
        "For individual airline use", REMAINDER,
        _ANY,
        "any characters",
    ),
)

SPEC = (
    make_field(FieldID.FORMAT_CODE,
        "Format Code", 1,
        r"[mM]",
        '"M"',
    ),
    make_field(FieldID.NUMBER_OF_LEGS_ENCODED,
        "Number of Legs Encoded", 1,
        r"[1-4]",
        "a digit between 1 and 4",
    ),
    make_field(FieldID.PASSENGER_NAME,
        "Passenger Name", 20,
        r"[a-zA-Z ]*/[a-zA-Z ]+",
        "SURNAME/GIVEN_NAME, left justified with trailing spaces",
    ),
    make_field(FieldID.ELECTRONIC_TICKET_INDICATOR,
        "Electronic Ticket Indicator", 1,
        r"[eElL]",
        "E or L",
    ),
    make_field(FieldID.OPERATING_CARRIER_PNR_CODE,
        "Operating Carrier PNR Code", 7,
        r"[a-zA-Z0-9]+ *",
        "up to 7 alphanumeric characters, left justified with trailing "
        "spaces",
    ),
    make_field(FieldID.FROM_CITY_AIRPORT_CODE,
        "From City Airport Code", 3,
        r"[a-zA-Z]{3}",
        "3 alpha characters",
    ),
    make_field(FieldID.TO_CITY_AIRPORT_CODE,
        "To City Airport Code", 3,
        r"[a-zA-Z]{3}",
        "3 alpha characters",
    ),
    make_field(FieldID.OPERATING_CARRIER_DESIGNATOR,
        "Operating Carrier Designator", 3,
        _DESIGNATOR,
        _DESIGNATOR_FORMAT,
    ),
    make_field(FieldID.FLIGHT_NUMBER,
        "Flight Number", 5,
        r"[0-9]{4}[a-zA-Z ]",
        "4 digits followed by an alpha character or a space",
    ),
    make_field(FieldID.DATE_OF_FLIGHT,
        "Date of Flight (Julian Date)", 3,
        _JULIAN_DAY,
        "a day of year between 001 and 366",
    ),
    make_field(FieldID.COMPARTMENT_CODE,
        "Compartment Code", 1,
        r"[a-zA-Z]",
        "1 alpha character",
    ),
    make_field(FieldID.SEAT_NUMBER,
        "Seat Number", 4,
        r"[0-9]{3}[a-zA-Z]|(?i:INF |GATE|STBY)",
        "3 digits followed by an alpha character, INF, GATE or STBY",
    ),
    make_field(FieldID.CHECK_IN_SEQUENCE_NUMBER,
        "Check-in Sequence Number", 5,
        r"[0-9]{4}[a-zA-Z ]",
        "4 digits followed by an alpha character or a space",
    ),
    make_field(FieldID.PASSENGER_STATUS,
        "Passenger Status", 1,
        r"[a-zA-Z0-9]",
        "1 alphanumeric character",
    ),
    make_field(FieldID.FIELD_SIZE_OF_VARIABLE_SIZE_FIELD,
        "Field Size of variable size field", 2,
        _HEX, _HEX_FORMAT,
        children=_VARIABLE_SIZE_FIELD,
    ),
    make_field(FieldID.BEGINNING_OF_SECURITY_DATA,
        "Beginning of Security Data", 1,
        r"\^?",
        '"^"',
    ),
    make_field(FieldID.TYPE_OF_SECURITY_DATA,
        "Type of Security Data", 1,
        r"[a-zA-Z0-9]",
        "1 alphanumeric character",
    ),
    make_field(FieldID.LENGTH_OF_SECURITY_DATA,
        "Length of Security Data", 2,
        _HEX, _HEX_FORMAT,
        children=(
            make_field(FieldID.SECURITY_DATA,
                "Security Data", REMAINDER,
                _ANY,
                "any characters",
            ),
        ),
    ),
)


def find_field(field_id: FieldID, spec=SPEC) -> Field | None:
    """Finds a field anywhere in a specification tree."""
    for f in spec:
        if f.id == field_id:
            return f
        found = find_field(field_id, f.children)
        if found is not None:
            return found
    return None
