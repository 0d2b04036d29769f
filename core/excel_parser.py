"""Parse a CESIM round results workbook into per-team records.

The layout is fixed: team names sit in a header row and every metric lives at a
known row of the first sheet (see ``core.constants.CELL_MAP``). Cells that are
missing or not numeric are read as 0, each substitution is reported in the log
trail so a malformed workbook does not go unnoticed.
"""
from __future__ import annotations

import logging
import numbers
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from .constants import CELL_MAP, DATA_KINDS, TEAM_FIRST_COL, TEAM_HEADER_ROW, TEAM_LAST_COL

logger = logging.getLogger(__name__)

# "1,234" or "12,345,678": comma used as thousands separator
_THOUSANDS = re.compile(r"^[-+]?\d{1,3}(,\d{3})+$")

# Key values echoed to the log trail for each team
_SUMMARY_FIELDS = {
    'performances': ('revenue_global', 'net_income_global', 'revenue_europe', 'net_income_europe'),
    'market_shares': ('market_share_global', 'market_share_usa', 'market_share_europe', 'market_share_asia'),
    'hr': ('rd_staff', 'turnover_rate', 'training_budget', 'monthly_salary'),
    'productions': ('tech1_production_usa', 'tech1_production_asia', 'plants_usa', 'plants_asia'),
    'financials': ('total_assets', 'total_equity', 'total_debt', 'total_liabilities'),
}


class WorkbookError(ValueError):
    """The workbook cannot be used as a round import."""


@dataclass
class ParsedRound:
    teams: List[str]
    performances: List[Dict[str, Any]] = field(default_factory=list)
    market_shares: List[Dict[str, Any]] = field(default_factory=list)
    hr: List[Dict[str, Any]] = field(default_factory=list)
    productions: List[Dict[str, Any]] = field(default_factory=list)
    financials: List[Dict[str, Any]] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)
    defaulted_cells: int = 0

    def records(self, kind: str) -> List[Dict[str, Any]]:
        return getattr(self, kind)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'teams': list(self.teams)}
        for kind in DATA_KINDS:
            data[kind] = [dict(r) for r in self.records(kind)]
        data['logs'] = list(self.logs)
        data['defaulted_cells'] = self.defaulted_cells
        return data


class _LogTrail:
    def __init__(self):
        self.lines: List[str] = []

    def __call__(self, message: str, level: int = logging.INFO):
        stamp = datetime.now(timezone.utc).isoformat()
        self.lines.append(f"[{stamp}] {message}")
        logger.log(level, message)


# ==============================================================================
#  CELL HELPERS
# ==============================================================================

def clean_str(val) -> str:
    if val is None or (not isinstance(val, str) and pd.isnull(val)):
        return ''
    if isinstance(val, float) and val.is_integer():
        val = int(val)
    return str(val).strip()


def to_number(val) -> Optional[float]:
    """Numeric value of a cell, or None when it cannot be read as a number."""
    if val is None:
        return None
    if isinstance(val, bool):
        return float(val)
    if isinstance(val, numbers.Number):
        num = float(val)
        return None if pd.isnull(num) else num
    if not isinstance(val, str):
        return None

    text = val.replace('\xa0', '').replace(' ', '').replace('%', '').strip()
    if not text:
        return None
    if _THOUSANDS.match(text):
        text = text.replace(',', '')
    elif ',' in text and '.' not in text:
        text = text.replace(',', '.')
    else:
        text = text.replace(',', '')
    try:
        return float(text)
    except ValueError:
        return None


def _cell(df: pd.DataFrame, row: int, col: int):
    if row < 0 or col < 0 or row >= len(df.index) or col >= len(df.columns):
        return None
    val = df.iat[row, col]
    if isinstance(val, str):
        return val if val.strip() else None
    if pd.isnull(val):
        return None
    return val


# ==============================================================================
#  WORKBOOK LOADING
# ==============================================================================

def _load_first_sheet(source, log: _LogTrail) -> pd.DataFrame:
    if hasattr(source, 'read'):
        source = source.read()
    if isinstance(source, (bytes, bytearray, memoryview)):
        source = BytesIO(bytes(source))

    try:
        xls = pd.ExcelFile(source)
    except Exception as exc:
        log(f"ERROR: unreadable workbook ({exc})", logging.ERROR)
        raise WorkbookError(f"Unreadable workbook: {exc}") from exc

    if not xls.sheet_names:
        log("ERROR: the workbook contains no sheets", logging.ERROR)
        raise WorkbookError("The workbook contains no sheets")

    sheet_name = xls.sheet_names[0]
    log(f"Using sheet: {sheet_name}")
    # Cell text such as "NA" or "n/a" is kept as written, only empty cells are blank
    return pd.read_excel(xls, sheet_name=sheet_name, header=None, keep_default_na=False)


def find_teams(df: pd.DataFrame, log: Optional[_LogTrail] = None) -> List[Tuple[str, int]]:
    """Team names from the header row, with the column each one was found in."""
    teams = []
    seen = set()
    for col in range(TEAM_FIRST_COL, TEAM_LAST_COL + 1):
        name = clean_str(_cell(df, TEAM_HEADER_ROW, col))
        if not name:
            continue
        if name in seen:
            if log:
                log(f"WARNING: duplicate team {name} in column {col} ignored", logging.WARNING)
            continue
        seen.add(name)
        teams.append((name, col))
        if log:
            log(f"Team found: {name} (column {col})")
    return teams


# ==============================================================================
#  EXTRACTION
# ==============================================================================

def _extract_kind(df, kind, teams, log: _LogTrail) -> Tuple[List[Dict[str, Any]], int]:
    cell_rows = CELL_MAP[kind]
    records = []
    defaulted = 0

    unmapped = [f for f, row in cell_rows.items() if row is None]
    if unmapped:
        log(f"No cell mapped for {', '.join(unmapped)}: stored as 0")

    for name, col in teams:
        record: Dict[str, Any] = {'team': name}
        for field_name, row in cell_rows.items():
            if row is None:
                record[field_name] = 0.0
                continue

            raw = _cell(df, row, col)
            value = to_number(raw)
            if value is None:
                defaulted += 1
                reason = 'empty cell' if raw is None else f"non-numeric value {raw!r}"
                log(f"WARNING: {name} {field_name} at row {row}, column {col}: {reason}, using 0",
                    logging.WARNING)
                value = 0.0
            record[field_name] = value

        summary = ', '.join(f"{f}={record[f]}" for f in _SUMMARY_FIELDS[kind])
        log(f"{name}: {summary}")
        records.append(record)

    return records, defaulted


def parse_round_workbook(source) -> ParsedRound:
    """Read a CESIM results workbook (bytes, path or file object)."""
    log = _LogTrail()
    log("=== START WORKBOOK PARSING ===")

    df = _load_first_sheet(source, log)

    teams = find_teams(df, log)
    if not teams:
        log("ERROR: no team found in the header row", logging.ERROR)
        raise WorkbookError("No team found in the workbook")
    log(f"Total teams found: {len(teams)}")

    parsed = ParsedRound(teams=[name for name, _ in teams])
    for kind in DATA_KINDS:
        log(f"--- {kind.upper()} ---")
        records, defaulted = _extract_kind(df, kind, teams, log)
        setattr(parsed, kind, records)
        parsed.defaulted_cells += defaulted

    if parsed.defaulted_cells:
        log(f"{parsed.defaulted_cells} cell(s) could not be read and were set to 0", logging.WARNING)
    log("=== END WORKBOOK PARSING ===")

    parsed.logs = log.lines
    return parsed
