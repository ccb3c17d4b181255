"""Command line tools for decoding Bar-Coded Boarding Passes."""

# Standard imports
import argparse

# Third-party imports
from dotenv import load_dotenv

# Project imports
import pbbcbp.tools as bt

# Load environment variables from .env file.
load_dotenv()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Tools for decoding Bar-Coded Boarding Passes."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # decode
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a BCBP-coded text string",
    )
    decode_parser.add_argument("bcbp",
        help="Boarding pass data",
        metavar="BCBP_TEXT",
        type=str,
    )
    decode_parser.add_argument("--json",
        action="store_true",
        help="Print the boarding pass as JSON",
    )
    decode_parser.add_argument("--strict",
        action="store_true",
        help="Fail if the boarding pass has unprocessed trailing data",
    )

    # pkpass
    pkpass_parser = subparsers.add_parser(
        "pkpass",
        help="Decode the boarding pass in a .pkpass file",
    )
    pkpass_parser.add_argument("path",
        help="Path to the .pkpass file",
        type=str,
    )
    pkpass_parser.add_argument("--json",
        action="store_true",
        help="Print the boarding pass as JSON",
    )

    # import-pkpasses
    subparsers.add_parser(
        "import-pkpasses",
        help="Decode .pkpass files in the import folder",
    )

    # Parse arguments
    args = parser.parse_args()
    match args.command:
        case "decode":
            bt.decode_bcbp(args.bcbp, as_json=args.json, strict=args.strict)
        case "pkpass":
            bt.show_pkpass(args.path, as_json=args.json)
        case "import-pkpasses":
            bt.import_pkpasses()
