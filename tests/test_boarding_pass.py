"""
Tests for decoding boarding passes.

Covers the guards that run before any field is read, the walk over
mandatory, conditional and security items, and the errors it reports.
"""

import dataclasses
from datetime import datetime

import pytest

from pbbcbp.boarding_pass import BoardingPass, Leg, MAX_LEGS, decode
from pbbcbp.errors import DecodeError, ErrorType
from pbbcbp.fields import SPEC, FieldID, find_field

# Everything before the variable size field of the mandatory sample.
MANDATORY_HEAD = (
    "M1DESMARAIS/LUC       EABC123 YULFRAAC 0834 326J001A0025 1"
)


def _decode_error(bcbp_str, **kwargs) -> DecodeError:
    with pytest.raises(DecodeError) as exc_info:
        decode(bcbp_str, **kwargs)
    return exc_info.value


class TestPreconditions:
    """Checks made before any field is processed."""

    def test_empty(self):
        e = _decode_error("")
        assert e.error_type == ErrorType.INSUFFICIENT_DATA
        assert e.value == 0
        assert e.position == 0

    def test_59_characters(self, mandatory_single):
        e = _decode_error(mandatory_single[:59])
        assert e.error_type == ErrorType.INSUFFICIENT_DATA
        assert e.value == 59

    def test_non_ascii(self):
        e = _decode_error(
            "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789世界"
        )
        assert e.error_type == ErrorType.NON_ASCII
        assert e.position == 62
        assert e.value == "世"

    def test_non_ascii_bytes(self, mandatory_single):
        data = mandatory_single[:2].encode() + "é".encode() \
            + mandatory_single[2:].encode()
        e = _decode_error(data)
        assert e.error_type == ErrorType.NON_ASCII
        assert e.position == 2
        assert e.value == "é"

    def test_non_ascii_checked_before_format_code(self, mandatory_single):
        e = _decode_error("S" + mandatory_single[1:] + "ü")
        assert e.error_type == ErrorType.NON_ASCII

    def test_unsupported_format(self):
        e = _decode_error(
            "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
        )
        assert e.error_type == ErrorType.UNSUPPORTED_BOARDING_PASS
        assert e.value == "a"

    def test_lowercase_m_is_unsupported(self, mandatory_single):
        e = _decode_error("m" + mandatory_single[1:])
        assert e.error_type == ErrorType.UNSUPPORTED_BOARDING_PASS
        assert e.value == "m"

    def test_invalid_leg_count(self):
        e = _decode_error(
            "MbcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
        )
        assert e.error_type == ErrorType.INVALID_DATA_FORMAT
        assert e.field == "Number of Legs Encoded"
        assert e.value == "b"
        assert e.position == 1


class TestMandatorySingle:
    """The mandatory items of a single leg pass."""

    def test_unique_fields(self, mandatory_single, pass_dt):
        bp = decode(mandatory_single, pass_dt=pass_dt)
        assert bp.format_code == "M"
        assert bp.number_of_legs_encoded == 1
        assert bp.passenger_name == "DESMARAIS/LUC"
        assert bp.electronic_ticket_indicator == "E"
        assert bp.version_number == 0
        assert bp.security_data == ""
        assert bp.unknown_data is None

    def test_leg_fields(self, mandatory_single, pass_dt):
        leg = decode(mandatory_single, pass_dt=pass_dt).legs[0]
        assert leg.operating_carrier_pnr_code == "ABC123"
        assert leg.from_city_airport_code == "YUL"
        assert leg.to_city_airport_code == "FRA"
        assert leg.operating_carrier_designator == "AC"
        assert leg.flight_number == "0834"
        assert leg.date_of_flight == "2021-11-22"
        assert leg.compartment_code == "J"
        assert leg.seat_number == "001A"
        assert leg.check_in_sequence_number == "0025"
        assert leg.passenger_status == "1"
        assert leg.for_individual_airline_use == ""

    def test_unused_legs_are_empty(self, mandatory_single):
        bp = decode(mandatory_single)
        assert len(bp.legs) == MAX_LEGS
        assert bp.legs[1:] == [Leg(), Leg(), Leg()]
        assert bp.flight_legs == [bp.legs[0]]

    def test_date_defaults_to_current_year(self, mandatory_single):
        leg = decode(mandatory_single).legs[0]
        assert leg.date_of_flight.startswith(f"{datetime.now().year}-")

    def test_decode_is_repeatable(self, mandatory_single, pass_dt):
        assert decode(mandatory_single, pass_dt=pass_dt) \
            == decode(mandatory_single, pass_dt=pass_dt)

    def test_bytes_input(self, mandatory_single, pass_dt):
        assert decode(mandatory_single.encode(), pass_dt=pass_dt) \
            == decode(mandatory_single, pass_dt=pass_dt)

    def test_from_str(self, mandatory_single, pass_dt):
        bp = BoardingPass.from_str(mandatory_single, pass_dt)
        assert bp.bcbp_str == mandatory_single
        assert str(bp).startswith("M1DESMARAIS/LUC·······E")

    def test_alphanumeric_check_in_sequence(self):
        e = _decode_error(
            "M1DESMARAIS/LUC       EABC123 YULFRAAC 0834 326J001AABCDE100"
        )
        assert e.error_type == ErrorType.INVALID_DATA_FORMAT
        assert e.field == "Check-in Sequence Number"
        assert e.value == "ABCDE"
        assert e.position == 52

    @pytest.mark.parametrize("year", [1, 9999])
    def test_flight_date_out_of_range(self, year):
        e = _decode_error(
            "M1DESMARAIS/LUC       EABC123 YULFRAAC 0834 366J001A0025 100",
            pass_dt=datetime(year, 6, 1),
        )
        assert e.error_type == ErrorType.INVALID_DATA_FORMAT
        assert e.field == "Date of Flight (Julian Date)"
        assert e.value == "366"
        assert e.position == 44


class TestFullMulti:
    """A two leg pass with every section present."""

    @pytest.fixture
    def bp(self, full_multi, pass_dt):
        return decode(full_multi, pass_dt=pass_dt)

    def test_unique_conditional(self, bp):
        assert bp.number_of_legs_encoded == 2
        assert bp.version_number == 6
        assert bp.passenger_description == "0"
        assert bp.source_of_check_in == "W"
        assert bp.source_of_boarding_pass_issuance == "W"
        assert bp.date_of_issue_of_boarding_pass == "2016-08-12"
        assert bp.document_type == "B"
        assert bp.airline_designator_of_boarding_pass_issuer == "AC"
        assert bp.baggage_tag_license_plate_number == "0014123456002"
        # Absent trailing items of the unique section.
        assert bp.first_non_consecutive_baggage_tag_license_plate_number == ""
        assert bp.second_non_consecutive_baggage_tag_license_plate_number == ""

    def test_first_leg(self, bp):
        assert bp.legs[0] == Leg(
            operating_carrier_pnr_code="ABC123",
            from_city_airport_code="YUL",
            to_city_airport_code="FRA",
            operating_carrier_designator="AC",
            flight_number="0834",
            date_of_flight="2021-11-22",
            compartment_code="J",
            seat_number="001A",
            check_in_sequence_number="0025",
            passenger_status="1",
            airline_numeric_code="014",
            document_form_serial_number="1234567890",
            selectee_indicator="1",
            international_documentation_verification="1",
            marketing_carrier_designator="AC",
            frequent_flyer_airline_designator="AC",
            frequent_flyer_number="1234567890123",
            idad_indicator="2",
            free_baggage_allowance="20K",
            fast_track="Y",
            for_individual_airline_use="LX58Z",
        )

    def test_second_leg(self, bp):
        assert bp.legs[1] == Leg(
            operating_carrier_pnr_code="DEF456",
            from_city_airport_code="FRA",
            to_city_airport_code="GVA",
            operating_carrier_designator="LH",
            flight_number="3664",
            date_of_flight="2021-11-23",
            compartment_code="C",
            seat_number="012C",
            check_in_sequence_number="0002",
            passenger_status="1",
            airline_numeric_code="014",
            document_form_serial_number="0987654321",
            selectee_indicator="0",
            international_documentation_verification="2",
            marketing_carrier_designator="LH",
            frequent_flyer_airline_designator="LH",
            frequent_flyer_number="992003674500000",
            idad_indicator="0",
            free_baggage_allowance="2PC",
            fast_track="N",
        )

    def test_remaining_legs_are_empty(self, bp):
        assert bp.legs[2].is_empty()
        assert bp.legs[3].is_empty()
        assert len(bp.flight_legs) == 2

    def test_security(self, bp):
        assert bp.type_of_security_data == "1"
        assert bp.security_data == "ABCDEFGHIJ"
        assert bp.unknown_data is None

    def test_leg_str(self, bp):
        assert str(bp.legs[1]) == "2021-11-23 LH 3664 FRA → GVA"


class TestSecurity:
    """Data after the last leg."""

    def test_security_section(self, mandatory_single):
        bp = decode(mandatory_single + "^105ABCDE")
        assert bp.type_of_security_data == "1"
        assert bp.security_data == "ABCDE"
        assert bp.unknown_data is None

    def test_security_data_keeps_separators(self, mandatory_single):
        bp = decode(mandatory_single + "^105ABCD\x1d")
        assert bp.security_data == "ABCD\x1d"
        assert bp.unknown_data is None

    def test_empty_security_data(self, mandatory_single):
        bp = decode(mandatory_single + "^100")
        assert bp.type_of_security_data == "1"
        assert bp.security_data == ""

    def test_trailing_data_is_not_fatal(self, mandatory_single):
        bp = decode(mandatory_single + "^105ABCDEXYZ")
        assert bp.security_data == "ABCDE"
        e = bp.unknown_data
        assert e.error_type == ErrorType.UNKNOWN_DATA
        assert e.value == "XYZ"
        assert e.position == 69
        assert not e.is_fatal

    def test_trailing_data_strict(self, mandatory_single):
        e = _decode_error(mandatory_single + "^105ABCDEXYZ", strict=True)
        assert e.error_type == ErrorType.UNKNOWN_DATA

    def test_missing_security_marker(self):
        e = _decode_error(MANDATORY_HEAD + "000")
        assert e.error_type == ErrorType.INVALID_DATA_FORMAT
        assert e.field == "Beginning of Security Data"
        assert e.value == "0"
        assert e.position == 60

    def test_security_data_longer_than_input(self, mandatory_single):
        e = _decode_error(mandatory_single + "^164ABC")
        assert e.error_type == ErrorType.UNEXPECTED_END_OF_INPUT
        assert e.field == "Length of Security Data"
        assert e.required == 100
        assert e.value == 3
        assert e.position == 64


class TestConditional:
    """Errors inside length-prefixed sub-sections."""

    def test_invalid_version_marker(self):
        e = _decode_error(MANDATORY_HEAD + "010")
        assert e.error_type == ErrorType.INVALID_DATA_FORMAT
        assert e.field == "Beginning of version number"
        assert e.value == "0"
        assert e.position == 60

    def test_non_hex_section_length(self):
        bcbp_str = MANDATORY_HEAD + "ZZ>5 "
        assert len(bcbp_str) == 63
        e = _decode_error(bcbp_str)
        assert e.error_type == ErrorType.INVALID_DATA_FORMAT
        assert e.field == "Field Size of variable size field"
        assert e.value == "ZZ"
        assert e.position == 58

    def test_section_longer_than_input(self):
        e = _decode_error(MANDATORY_HEAD + "10>5")
        assert e.error_type == ErrorType.UNEXPECTED_END_OF_INPUT
        assert e.field == "Field Size of variable size field"
        assert e.required == 16
        assert e.value == 2
        assert e.position == 60

    def test_nested_section_longer_than_enclosing(self):
        # The unique section claims 16 characters but its enclosing
        # section ends right after the length.
        e = _decode_error(MANDATORY_HEAD + "04>510")
        assert e.error_type == ErrorType.UNEXPECTED_END_OF_INPUT
        assert e.field == "Field Size of following structured message - unique"
        assert e.required == 16
        assert e.value == 0
        assert e.position == 64

    def test_truncated_item_in_section(self):
        # Only 2 of the 4 characters of the date of issue are present.
        e = _decode_error(MANDATORY_HEAD + "09>6050WW62")
        assert e.error_type == ErrorType.UNEXPECTED_END_OF_INPUT
        assert e.field == "Date of Issue of Boarding Pass (Julian Date)"
        assert e.position == 67

    def test_missing_second_leg(self, mandatory_single):
        e = _decode_error("M2" + mandatory_single[2:])
        assert e.error_type == ErrorType.UNEXPECTED_END_OF_INPUT
        assert e.field == "Operating Carrier PNR Code"
        assert e.position == 60

    def test_partial_pass_attached_to_error(self):
        e = _decode_error(MANDATORY_HEAD + "010")
        assert e.boarding_pass.passenger_name == "DESMARAIS/LUC"
        assert e.boarding_pass.legs[0].from_city_airport_code == "YUL"

    def test_airline_use_only(self):
        bp = decode(MANDATORY_HEAD + "08>60000XY")
        assert bp.version_number == 6
        assert bp.passenger_description == ""
        assert bp.legs[0].airline_numeric_code == ""
        assert bp.legs[0].for_individual_airline_use == "XY"

    def test_blank_date_of_issue(self):
        bp = decode(MANDATORY_HEAD + "0C>6080WW    B")
        assert bp.source_of_check_in == "W"
        assert bp.date_of_issue_of_boarding_pass == ""
        assert bp.document_type == "B"

    def test_date_of_issue_out_of_range(self, full_multi):
        e = _decode_error(full_multi, pass_dt=datetime(5, 6, 1))
        assert e.error_type == ErrorType.INVALID_DATA_FORMAT
        assert e.field == "Date of Issue of Boarding Pass (Julian Date)"
        assert e.value == "6225"
        assert e.position == 67
        assert e.boarding_pass.legs[0].date_of_flight == "0005-11-22"


class TestInjectedSpec:
    """Decoding with a specification other than the default."""

    def test_malformed_spec(self, mandatory_single):
        bogus = find_field(FieldID.FAST_TRACK)
        spec = tuple(
            dataclasses.replace(f, children=(bogus,))
            if f.id == FieldID.PASSENGER_STATUS else f
            for f in SPEC
        )
        e = _decode_error(mandatory_single, spec=spec)
        assert e.error_type == ErrorType.MALFORMED_SPEC
        assert e.field == "Passenger Status"
        assert e.position == 57

    def test_default_spec_is_unchanged(self, mandatory_single):
        assert not find_field(FieldID.PASSENGER_STATUS).is_section
        assert decode(mandatory_single).legs[0].passenger_status == "1"
