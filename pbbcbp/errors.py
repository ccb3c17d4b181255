"""Errors raised while decoding boarding passes."""

# Standard imports
from enum import Enum

_REPORT = """bcbp: {label}:
  boarding pass data:
  | "{bcbp_str}"
  | {caret}
  |
  = reason: {detail}
"""


class ErrorType(Enum):
    """The kinds of error a decode can produce."""
    INVALID_DATA_FORMAT = "InvalidDataFormat"
    INSUFFICIENT_DATA = "InsufficientData"
    NON_ASCII = "NonASCII"
    UNSUPPORTED_BOARDING_PASS = "UnsupportedBoardingPass"
    UNEXPECTED_END_OF_INPUT = "UnexpectedEndOfInput"
    MALFORMED_SPEC = "MalformedSpec"
    UNKNOWN_DATA = "UnknownData"

    @property
    def label(self) -> str:
        """Human readable name of the error type."""
        return describe(self)


def describe(error_type) -> str:
    """Converts an ErrorType into a human readable label."""
    match error_type:
        case ErrorType.INVALID_DATA_FORMAT:
            return "Invalid data format"
        case ErrorType.INSUFFICIENT_DATA:
            return "Insufficient data"
        case ErrorType.NON_ASCII:
            return "Non ASCII"
        case ErrorType.UNSUPPORTED_BOARDING_PASS:
            return "Unsupported boarding pass"
        case ErrorType.UNEXPECTED_END_OF_INPUT:
            return "Unexpected end of input"
        case ErrorType.MALFORMED_SPEC:
            return "Malformed spec"
        case ErrorType.UNKNOWN_DATA:
            return "Unknown data"
        case _:
            raise ValueError(f"Unrecognized decode error type: {error_type!r}")


class DecodeError(Exception):
    """
    Represents an error decoding a Bar-Coded Boarding Pass.

    The position is the 0-based offset in the boarding pass data where
    the error was detected. Every error type except UNKNOWN_DATA is
    fatal; UNKNOWN_DATA is reported alongside a fully decoded pass.
    """
    def __init__(self,
        error_type: ErrorType,
        bcbp_str: str,
        position: int,
        value,
        detail: str,
        field: str | None = None,
        required: int | None = None,
    ):
        self.error_type = error_type
        self.bcbp_str = bcbp_str
        self.position = position
        self.value = value
        self.detail = detail
        self.field = field
        self.required = required
        self.boarding_pass = None # Partially decoded pass, if any
        super().__init__(str(self))

    def __str__(self):
        # The opening quote of the data line shifts the caret by one.
        caret = f"{' ' * (self.position + 1)}^ got {self.got}"
        return _REPORT.format(
            label=self.error_type.label,
            bcbp_str=self.bcbp_str,
            caret=caret,
            detail=self.detail,
        )

    @property
    def got(self) -> str:
        """Describes the offending value."""
        match self.error_type:
            case (ErrorType.INSUFFICIENT_DATA
                    | ErrorType.UNEXPECTED_END_OF_INPUT):
                return f"{self.value} character(s)"
            case ErrorType.UNKNOWN_DATA:
                return f"{len(self.value)} character(s)"
            case ErrorType.NON_ASCII:
                return self.value
            case ErrorType.MALFORMED_SPEC:
                return f'"{self.value}" item defines sub-section'
            case _:
                return f'"{self.value}"'

    @property
    def is_fatal(self) -> bool:
        """Whether decoding was aborted by this error."""
        return self.error_type != ErrorType.UNKNOWN_DATA


def invalid_data_format(bcbp_str, position, field, value) -> DecodeError:
    """Reports a value that does not match its field's format."""
    return DecodeError(
        ErrorType.INVALID_DATA_FORMAT, bcbp_str, position, value,
        f'data for "{field.description}" must be {field.format}',
        field=field.description,
    )


def insufficient_data(bcbp_str, length) -> DecodeError:
    """Reports boarding pass data shorter than the mandatory 60 characters."""
    return DecodeError(
        ErrorType.INSUFFICIENT_DATA, bcbp_str, length, length,
        "boarding pass data must have at least 60 characters",
    )


def non_ascii(bcbp_str, position, char) -> DecodeError:
    """Reports a non-ASCII character in the boarding pass data."""
    return DecodeError(
        ErrorType.NON_ASCII, bcbp_str, position, char,
        "boarding pass data must contain only ASCII characters",
    )


def unsupported_boarding_pass(bcbp_str, format_code) -> DecodeError:
    """Reports a boarding pass that is not an "M" type."""
    return DecodeError(
        ErrorType.UNSUPPORTED_BOARDING_PASS, bcbp_str, 0, format_code,
        'boarding pass must be a "M" type',
    )


def unexpected_end_of_input(bcbp_str, position, field, remaining, length
) -> DecodeError:
    """Reports a field or section longer than the remaining data."""
    return DecodeError(
        ErrorType.UNEXPECTED_END_OF_INPUT, bcbp_str, position,
        len(remaining),
        f'"{field.description}" must have at least {length} character(s)',
        field=field.description,
        required=length,
    )


def malformed_spec(bcbp_str, position, field) -> DecodeError:
    """Reports a field that wrongly defines a sub-section."""
    return DecodeError(
        ErrorType.MALFORMED_SPEC, bcbp_str, position, field.description,
        "only the following items can define sub-sections:\n"
        '\t\t- "Field Size of variable size field"\n'
        '\t\t- "Field Size of following structured message - unique"\n'
        '\t\t- "Field Size of following structured message - repeated"\n'
        '\t\t- "Length of Security Data"',
        field=field.description,
    )


def unknown_data(bcbp_str, position, remaining) -> DecodeError:
    """Reports unprocessed data left over after a successful decode."""
    return DecodeError(
        ErrorType.UNKNOWN_DATA, bcbp_str, position, remaining,
        f'boarding pass successfully decoded but "{remaining}" is unknown '
        "and has not been processed",
    )
