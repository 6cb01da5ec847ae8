"""
Fleet CSV loaders.

Reads the five fleet exports (navigation events, consumption, docking,
coating, ship particulars). Headers in these exports are in Portuguese
and not consistently spelled across extractions, so columns are mapped
by position and the header row is skipped.

Loaders never abort on a bad row: unusable rows are counted, logged at
debug level and skipped. A missing file is an error.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .parsing import parse_us_date, safe_float, safe_int, safe_str
from .records import (
    CoatingRecord,
    ConsumptionRecord,
    DockingRecord,
    NavigationEvent,
    ShipDetail,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Column index maps (0-based positions in each export)
# ---------------------------------------------------------------------------

DOCKING_COLUMNS: Dict[str, int] = {
    "ship_name": 0,      # Navio
    "docking_date": 1,   # Docagem (M/D/YYYY)
    "docking_type": 2,   # Tipo
}

COATING_COLUMNS: Dict[str, int] = {
    "code": 0,                      # Sigla
    "ship_name": 1,                 # Nome do navio
    "class_type": 2,                # TipoClass
    "cargo_type": 3,                # TipoCarga
    "class_number": 4,              # ClasseNum
    "application_date": 5,         # Data da aplicacao (M/D/YYYY)
    "base_period_weeks": 6,         # Cr1. Periodo base de verificacao
    "max_accumulated_stoppage": 7,  # Cr1. Parada maxima acumulada no periodo
}

SHIP_DETAIL_COLUMNS: Dict[str, int] = {
    "ship_name": 0,  # Nome do navio
    "ship_class": 1,  # Classe
    "cargo_type": 2,  # Tipo
    "dwt": 3,        # Porte Bruto
    "length_m": 4,   # Comprimento total (m)
    "beam_m": 5,     # Boca (m)
    "draft_m": 6,    # Calado (m)
    "depth_m": 7,    # Pontal (m)
}

EVENT_COLUMNS: Dict[str, int] = {
    "session_id": 0,
    "ship_name": 1,
    "ship_class": 2,
    "event_name": 3,
    "start_gmt_date": 4,
    "end_gmt_date": 5,
    "duration": 6,
    "distance": 7,
    "aft_draft": 8,
    "fwd_draft": 9,
    "mid_draft": 10,
    "trim": 11,
    "displacement": 12,
    "beaufort_scale": 13,
    "sea_condition": 14,
    # 15, 16: Beaufort / sea condition descriptions (unused)
    "speed": 17,
    "speed_gps": 18,
    "port": 19,
    "latitude": 20,
    "longitude": 21,
}

CONSUMPTION_COLUMNS: Dict[str, int] = {
    "session_id": 0,         # SESSION_ID
    "consumed_quantity": 1,  # CONSUMED_QUANTITY (tons)
    "description": 2,        # DESCRIPTION
}


def read_export(path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """
    Read a CSV export as raw text, positional columns, header row skipped.

    Returns an empty frame for files holding only a header.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Fleet export not found: {path}")

    try:
        df = pd.read_csv(
            path,
            header=None,
            skiprows=1,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            on_bad_lines="skip",
            encoding=encoding,
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"{path.name}: no data rows")
        return pd.DataFrame()

    logger.debug(f"{path.name}: raw shape {df.shape}")
    return df


def _cell(row: pd.Series, col_idx: int) -> Any:
    """Get cell value by column index (None past the end of short rows)."""
    if col_idx >= len(row):
        return None
    return row.iloc[col_idx]


def _text_fields(row: pd.Series, columns: Dict[str, int]) -> Dict[str, Optional[str]]:
    return {name: safe_str(_cell(row, idx)) for name, idx in columns.items()}


class FleetDataLoader:
    """
    Load fleet exports from a data directory.

    Usage:
        loader = FleetDataLoader(Path("data"))
        events = loader.load_navigation_events()
        dockings = loader.load_docking_records()
    """

    DOCKING_FILE = "dados_docagem.csv"
    COATING_FILE = "revestimento.csv"
    SHIP_DETAILS_FILE = "dados_navio.csv"
    EVENTS_FILE = "ResultadoQueryEventos.csv"
    CONSUMPTION_FILE = "ResultadoQueryConsumo.csv"

    def __init__(
        self,
        data_dir: Path,
        docking_file: Optional[str] = None,
        coating_file: Optional[str] = None,
        ship_details_file: Optional[str] = None,
        events_file: Optional[str] = None,
        consumption_file: Optional[str] = None,
        encoding: str = "utf-8",
    ):
        self.data_dir = Path(data_dir)
        self.docking_path = self.data_dir / (docking_file or self.DOCKING_FILE)
        self.coating_path = self.data_dir / (coating_file or self.COATING_FILE)
        self.ship_details_path = self.data_dir / (ship_details_file or self.SHIP_DETAILS_FILE)
        self.events_path = self.data_dir / (events_file or self.EVENTS_FILE)
        self.consumption_path = self.data_dir / (consumption_file or self.CONSUMPTION_FILE)
        self.encoding = encoding

        # Rows skipped by the most recent load, per export
        self.skipped: Dict[str, int] = {}

    @classmethod
    def from_settings(cls, settings) -> "FleetDataLoader":
        """Build a loader from a hullperf.config.Settings instance."""
        return cls(
            data_dir=Path(settings.data_dir),
            docking_file=settings.docking_file,
            coating_file=settings.coating_file,
            ship_details_file=settings.ship_details_file,
            events_file=settings.events_file,
            consumption_file=settings.consumption_file,
            encoding=settings.csv_encoding,
        )

    # ------------------------------------------------------------------
    # Raw-text exports (parsed downstream by the consolidator)
    # ------------------------------------------------------------------

    def load_navigation_events(self) -> List[NavigationEvent]:
        df = read_export(self.events_path, self.encoding)
        events = []
        skipped = 0
        for _, row in df.iterrows():
            fields = _text_fields(row, EVENT_COLUMNS)
            if not fields["session_id"] or not fields["ship_name"]:
                skipped += 1
                continue
            events.append(NavigationEvent(**fields))

        self._finish("events", len(events), skipped)
        return events

    def load_consumption_records(self) -> List[ConsumptionRecord]:
        df = read_export(self.consumption_path, self.encoding)
        records = []
        skipped = 0
        for _, row in df.iterrows():
            fields = _text_fields(row, CONSUMPTION_COLUMNS)
            if not fields["session_id"]:
                skipped += 1
                continue
            records.append(ConsumptionRecord(**fields))

        self._finish("consumption", len(records), skipped)
        return records

    # ------------------------------------------------------------------
    # Parsed exports
    # ------------------------------------------------------------------

    def load_docking_records(self) -> List[DockingRecord]:
        df = read_export(self.docking_path, self.encoding)
        records = []
        skipped = 0
        for row_idx, row in df.iterrows():
            ship_name = safe_str(_cell(row, DOCKING_COLUMNS["ship_name"]))
            docking_date = parse_us_date(_cell(row, DOCKING_COLUMNS["docking_date"]))
            if not ship_name or docking_date is None:
                logger.debug(f"{self.docking_path.name} row {row_idx}: skipped (name/date)")
                skipped += 1
                continue
            records.append(DockingRecord(
                ship_name=ship_name,
                docking_date=docking_date,
                docking_type=safe_str(_cell(row, DOCKING_COLUMNS["docking_type"])),
            ))

        self._finish("docking", len(records), skipped)
        return records

    def load_coating_records(self) -> List[CoatingRecord]:
        df = read_export(self.coating_path, self.encoding)
        records = []
        skipped = 0
        for row_idx, row in df.iterrows():
            fields = _text_fields(row, COATING_COLUMNS)
            application_date = parse_us_date(fields["application_date"])
            base_period = safe_int(fields["base_period_weeks"])
            if not fields["ship_name"] or application_date is None or base_period is None:
                logger.debug(f"{self.coating_path.name} row {row_idx}: skipped")
                skipped += 1
                continue
            records.append(CoatingRecord(
                ship_name=fields["ship_name"],
                application_date=application_date,
                base_period_weeks=base_period,
                max_accumulated_stoppage=safe_int(fields["max_accumulated_stoppage"]),
                code=fields["code"],
                class_type=fields["class_type"],
                cargo_type=fields["cargo_type"],
                class_number=fields["class_number"],
            ))

        self._finish("coating", len(records), skipped)
        return records

    def load_ship_details(self) -> List[ShipDetail]:
        df = read_export(self.ship_details_path, self.encoding)
        details = []
        skipped = 0
        for row_idx, row in df.iterrows():
            fields = _text_fields(row, SHIP_DETAIL_COLUMNS)
            dwt = safe_float(fields["dwt"])
            if not fields["ship_name"] or dwt is None:
                logger.debug(f"{self.ship_details_path.name} row {row_idx}: skipped (name/DWT)")
                skipped += 1
                continue
            details.append(ShipDetail(
                ship_name=fields["ship_name"],
                ship_class=fields["ship_class"] or "",
                cargo_type=fields["cargo_type"],
                dwt=dwt,
                length_m=safe_float(fields["length_m"]),
                beam_m=safe_float(fields["beam_m"]),
                draft_m=safe_float(fields["draft_m"]),
                depth_m=safe_float(fields["depth_m"]),
            ))

        self._finish("ship_details", len(details), skipped)
        return details

    def _finish(self, export: str, loaded: int, skipped: int) -> None:
        self.skipped[export] = skipped
        logger.info(f"Loaded {loaded} {export} rows, skipped {skipped}")
