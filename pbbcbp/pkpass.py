"""Tools for reading Apple Wallet boarding passes."""

# Standard imports
import json
from datetime import datetime
from pathlib import Path
from zipfile import ZipFile
from zoneinfo import ZoneInfo

# Third-party imports
import colorama
from dateutil.parser import isoparse

# Project imports
from pbbcbp.boarding_pass import BoardingPass, decode

colorama.init()

class PKPass():
    """
    Represents an Apple Wallet PKPass boarding pass.

    The barcode message is decoded as a BCBP, using the pass's relevant
    date to resolve the year of Julian dates. Decode errors propagate.
    """
    PASS_FILE = "pass.json"

    def __init__(self, path: Path):
        self.path = Path(path)
        self.pass_json: dict = self._load_pass_json()
        self.relevant_date: datetime | None = self._parse_relevant_date()
        self.message: str | None = self._parse_message()
        self.boarding_pass: BoardingPass | None = self._boarding_pass()

    @property
    def archive_filename(self) -> str:
        """Creates an archive filename."""
        fields = []
        if self.relevant_date is not None:
            fields.append(self.relevant_date.strftime("%Y%m%dT%H%MZ"))
        elif self.boarding_pass is not None:
            fields.append(
                self.boarding_pass.legs[0].date_of_flight.replace("-", "")
                or "NODATE"
            )
        else:
            fields.append("NODATE")
        if self.boarding_pass is not None:
            leg = self.boarding_pass.legs[0]
            fields.append(leg.operating_carrier_designator)
            fields.append(leg.flight_number.lstrip("0") or "0")
            fields.append("-".join([
                leg.from_city_airport_code, leg.to_city_airport_code
            ]))
            leg_count = len(self.boarding_pass.flight_legs)
            if leg_count > 1:
                fields.append(f"{leg_count}LEGS")
        fields = [f for f in fields if f]
        return "_".join(fields) + ".pkpass"

    def _boarding_pass(self) -> BoardingPass | None:
        """Decodes the barcode message."""
        if self.message is None:
            return None
        return decode(self.message, pass_dt=self.relevant_date)

    def _load_pass_json(self) -> dict:
        """Gets boarding pass JSON."""
        with ZipFile(self.path, 'r') as zf:
            if PKPass.PASS_FILE not in zf.namelist():
                print(
                    colorama.Fore.YELLOW
                    + f"⚠️ {PKPass.PASS_FILE} not found in {self.path}."
                    + colorama.Style.RESET_ALL
                )
                return {}
            with zf.open(PKPass.PASS_FILE) as pf:
                return json.loads(pf.read().decode('utf-8'))

    def _parse_message(self) -> str | None:
        """Gets the barcode message, preferring the legacy barcode key."""
        barcode = self.pass_json.get('barcode')
        if barcode is None:
            barcodes = self.pass_json.get('barcodes') or [{}]
            barcode = barcodes[0]
        return barcode.get('message')

    def _parse_relevant_date(self) -> datetime | None:
        """Gets the PKPass date."""
        try:
            pass_date = isoparse(self.pass_json.get('relevantDate'))
            return pass_date.astimezone(ZoneInfo("UTC"))
        except (TypeError, ValueError):
            return None
