"""Functions for CLI commands."""

# Standard imports
import os
import sys
from pathlib import Path

# Third-party imports
import colorama
from tabulate import tabulate

# Project imports
import pbbcbp.export as ex
from pbbcbp.boarding_pass import BoardingPass, decode
from pbbcbp.errors import DecodeError
from pbbcbp.pkpass import PKPass

colorama.init()

IMPORT_PATH_VAR = "BCBP_IMPORT_PATH"

# Labels for the unique fields shown in text output.
_PASS_LABELS = {
    'passenger_name': "Passenger",
    'electronic_ticket_indicator': "E-ticket",
    'version_number': "Version",
    'passenger_description': "Passenger description",
    'source_of_check_in': "Check-in source",
    'source_of_boarding_pass_issuance': "Issuance source",
    'date_of_issue_of_boarding_pass': "Issued",
    'document_type': "Document type",
    'airline_designator_of_boarding_pass_issuer': "Issuer",
    'baggage_tag_license_plate_number': "Bag tag",
    'first_non_consecutive_baggage_tag_license_plate_number': "Bag tag 2",
    'second_non_consecutive_baggage_tag_license_plate_number': "Bag tag 3",
    'type_of_security_data': "Security type",
    'security_data': "Security data",
}

def decode_bcbp(bcbp_str: str, as_json: bool = False,
    strict: bool = False,
) -> BoardingPass:
    """Decodes a Bar-Coded Boarding Pass string and prints it."""
    try:
        bp = decode(bcbp_str, strict=strict)
    except DecodeError as e:
        _print_error(e)
        sys.exit(1)
    _print_boarding_pass(bp, as_json)
    return bp

def show_pkpass(path: str, as_json: bool = False) -> PKPass:
    """Decodes the boarding pass inside a .pkpass file and prints it."""
    try:
        pkpass = PKPass(Path(path))
    except DecodeError as e:
        _print_error(e)
        sys.exit(1)
    if pkpass.boarding_pass is None:
        print(f"⚠️ No barcode message found in {path}.")
        sys.exit(1)
    print(f"Relevant date: {pkpass.relevant_date}")
    print(f"Archive filename: {pkpass.archive_filename}")
    _print_boarding_pass(pkpass.boarding_pass, as_json)
    return pkpass

def import_pkpasses() -> list[PKPass]:
    """Decodes every .pkpass file in the import folder."""
    import_folder = os.getenv(IMPORT_PATH_VAR)
    if import_folder is None:
        raise KeyError(
            f"Environment variable {IMPORT_PATH_VAR} is missing."
        )
    import_path = Path(import_folder)
    if not import_path.is_dir():
        raise KeyError(
            f"Environment variable {IMPORT_PATH_VAR} is not a directory."
        )
    print(f"Importing digital boarding passes from {import_path}")
    pkpasses = []
    for path in sorted(f for f in import_path.glob("*.pkpass") if f.is_file()):
        print(f"Processing {path}")
        try:
            pkpass = PKPass(path)
        except DecodeError as e:
            _print_error(e)
            continue
        if pkpass.boarding_pass is None:
            print(
                colorama.Fore.YELLOW
                + "⚠️ No barcode message found. Skipping this pass."
                + colorama.Style.RESET_ALL
            )
            continue
        for leg in pkpass.boarding_pass.flight_legs:
            print(f"  {leg}")
        print(f"  → {pkpass.archive_filename}")
        pkpasses.append(pkpass)
    print(f"{len(pkpasses)} boarding pass(es) imported.")
    return pkpasses

def _print_boarding_pass(bp: BoardingPass, as_json: bool) -> None:
    """Prints a decoded boarding pass as JSON or as tables."""
    if bp.unknown_data is not None:
        print(
            colorama.Fore.YELLOW
            + str(bp.unknown_data)
            + colorama.Style.RESET_ALL
        )
    if as_json:
        print(ex.to_json(bp))
        return
    table = [
        [label, getattr(bp, name)]
        for name, label in _PASS_LABELS.items()
        if getattr(bp, name)
    ]
    print(tabulate(table))
    print(tabulate(ex.leg_rows(bp), headers=ex.LEG_HEADERS))

def _print_error(e: DecodeError) -> None:
    """Prints a decode error report."""
    print(colorama.Fore.RED + str(e) + colorama.Style.RESET_ALL)
