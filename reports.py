"""
Filtering and aggregation behind the reports view.

Everything here is pure: the dashboard calls these functions on every rerun
with the full ticket frame and the current filter state.
"""

import logging
import os
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd


logger = logging.getLogger(__name__)

ALL = "all"
NOT_ASSIGNED = "N/A"
TOP_AREA_LIMIT = 8

TIME_RANGE_DAYS = {"7d": 7, "30d": 30, "90d": 90}
TIME_RANGE_LABELS = {
    "7d": "Last 7 days",
    "30d": "Last 30 days",
    "90d": "Last 90 days",
    ALL: "Entire period",
}
DEFAULT_TIME_RANGE = "30d"
DEFAULT_REFERENCE_DATE = date(2026, 2, 7)

TICKET_COLUMNS = [
    "Number",
    "Title",
    "Entry Date",
    "Completion Date",
    "Status",
    "Area",
    "Technician",
]
DERIVED_COLUMNS = ["Entry Parsed", "Completion Parsed", "Processing Days"]

COLUMN_ALIASES = {
    "id": "Number",
    "number": "Number",
    "title": "Title",
    "summary": "Title",
    "entryDate": "Entry Date",
    "entry_date": "Entry Date",
    "completionDate": "Completion Date",
    "completion_date": "Completion Date",
    "status": "Status",
    "area": "Area",
    "technician": "Technician",
}

TECHNICIAN_COLORS = [
    "#0d6efd",
    "#6f42c1",
    "#dc3545",
    "#fd7e14",
    "#198754",
    "#6c757d",
    "#343a40",
    "#adb5bd",
]


class Status(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    OVERDUE = "Overdue"
    COMPLETED = "Completed"


class Role(str, Enum):
    ADMIN = "Admin"
    TECHNICIAN = "Technician"
    REPORTER = "Reporter"


STATUSES = [status.value for status in Status]


@dataclass
class User:
    name: str
    role: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            name=str(data.get("name") or "").strip(),
            role=str(data.get("role") or "").strip(),
        )

    @property
    def is_technician(self) -> bool:
        return self.role == Role.TECHNICIAN.value


@dataclass
class ReportFilters:
    """Filter state of the reports view. Defaults show the last 30 days of everything."""

    time_range: str = DEFAULT_TIME_RANGE
    area: str = ALL
    status: str = ALL
    technician: str = ALL

    def reset(self) -> "ReportFilters":
        return ReportFilters()

    def active_categories(self) -> Dict[str, str]:
        categories = {
            "Area": self.area,
            "Status": self.status,
            "Technician": self.technician,
        }
        return {label: value for label, value in categories.items() if value != ALL}


DEFAULT_FILTERS = ReportFilters()


@dataclass
class ReportStats:
    total: int = 0
    completed: int = 0
    overdue: int = 0
    avg_processing_days: float = 0.0


def parse_german_date(value: Any) -> Optional[date]:
    """Parse a ``DD.MM.YYYY`` string. Empty, ``N/A`` and malformed values give None."""

    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value or value == NOT_ASSIGNED:
        return None
    parts = value.split(".")
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(part) for part in parts)
        return date(year, month, day)
    except ValueError:
        return None


def _parse_date_column(series: pd.Series) -> pd.Series:
    parsed = series.map(parse_german_date)
    return pd.to_datetime(parsed, errors="coerce")


def prepare_ticket_frame(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(col).strip() for col in df.columns]
    df = df.rename(columns={k: v for k, v in COLUMN_ALIASES.items() if k in df.columns})
    df = df.loc[:, ~df.columns.duplicated()].copy()

    missing_cols = [col for col in TICKET_COLUMNS if col not in df.columns]
    for col in missing_cols:
        df[col] = pd.NA

    df["Technician"] = df["Technician"].fillna(NOT_ASSIGNED).astype(str)
    df["Area"] = df["Area"].fillna("").astype(str)
    df["Status"] = df["Status"].fillna("").astype(str)

    df["Entry Parsed"] = _parse_date_column(df["Entry Date"])
    df["Completion Parsed"] = _parse_date_column(df["Completion Date"])
    df["Processing Days"] = (
        (df["Completion Parsed"] - df["Entry Parsed"]).dt.total_seconds() / 86400
    )

    return df[TICKET_COLUMNS + DERIVED_COLUMNS].reset_index(drop=True)


def empty_ticket_frame() -> pd.DataFrame:
    return prepare_ticket_frame(pd.DataFrame(columns=TICKET_COLUMNS))


def tickets_frame_from_records(records: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    records = list(records)
    if not records:
        return empty_ticket_frame()
    return prepare_ticket_frame(pd.DataFrame.from_records(records))


def users_from_records(records: Iterable[Dict[str, Any]]) -> List[User]:
    users = [User.from_dict(record) for record in records]
    return [user for user in users if user.name]


def technician_names(users: Iterable[User]) -> List[str]:
    # dict keeps first-seen order and drops duplicate names
    return list(dict.fromkeys(user.name for user in users if user.is_technician))


def area_options(df: pd.DataFrame) -> List[str]:
    areas = [value for value in df["Area"].dropna().unique() if value]
    return sorted(areas, key=lambda value: str(value).lower())


def reference_date() -> date:
    """The frozen "today" that bounded time ranges count back from."""

    raw = (os.getenv("REPORT_REFERENCE_DATE") or "").strip()
    if not raw:
        return DEFAULT_REFERENCE_DATE
    if raw.lower() == "today":
        return date.today()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        logger.warning(
            "Ignoring invalid REPORT_REFERENCE_DATE %r; using %s", raw, DEFAULT_REFERENCE_DATE
        )
        return DEFAULT_REFERENCE_DATE


def filter_tickets(df: pd.DataFrame, filters: ReportFilters, today: date) -> pd.DataFrame:
    mask = pd.Series(True, index=df.index)

    if filters.time_range != ALL:
        if filters.time_range not in TIME_RANGE_DAYS:
            raise ValueError(f"Unknown time range: {filters.time_range!r}")
        cutoff = pd.Timestamp(today - timedelta(days=TIME_RANGE_DAYS[filters.time_range]))
        mask &= df["Entry Parsed"].notna() & (df["Entry Parsed"] >= cutoff)

    for column, value in (
        ("Area", filters.area),
        ("Status", filters.status),
        ("Technician", filters.technician),
    ):
        if value != ALL:
            mask &= df[column] == value

    return df[mask]


def _resolved_mask(df: pd.DataFrame) -> pd.Series:
    return (df["Status"] == Status.COMPLETED.value) & df["Processing Days"].notna()


def _round_half_up(value: float) -> float:
    # Halves round away from zero (1.25 -> 1.3), not to the even neighbour.
    return float(Decimal(str(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_stats(filtered: pd.DataFrame) -> ReportStats:
    resolved_days = filtered.loc[_resolved_mask(filtered), "Processing Days"]
    avg_processing = _round_half_up(resolved_days.mean()) if not resolved_days.empty else 0.0
    return ReportStats(
        total=len(filtered),
        completed=int((filtered["Status"] == Status.COMPLETED.value).sum()),
        overdue=int((filtered["Status"] == Status.OVERDUE.value).sum()),
        avg_processing_days=avg_processing,
    )


def _bar_frame(labels: List[str], values: List[float]) -> pd.DataFrame:
    data = pd.DataFrame({"Label": labels, "Value": values})
    return data.sort_values("Value", ascending=False, kind="stable").reset_index(drop=True)


def tickets_by_area(filtered: pd.DataFrame, limit: int = TOP_AREA_LIMIT) -> pd.DataFrame:
    counts = filtered.groupby("Area", sort=False).size()
    data = _bar_frame([str(label) for label in counts.index], [int(v) for v in counts.values])
    return data.head(limit)


def tickets_by_technician(filtered: pd.DataFrame, technicians: List[str]) -> pd.DataFrame:
    names = [name for name in dict.fromkeys(technicians) if name != NOT_ASSIGNED]
    counts = filtered["Technician"].value_counts()
    data = _bar_frame(names, [int(counts.get(name, 0)) for name in names])
    data["Color"] = [TECHNICIAN_COLORS[i % len(TECHNICIAN_COLORS)] for i in range(len(data))]
    return data


def technician_workload(filtered: pd.DataFrame, technicians: List[str]) -> pd.DataFrame:
    """Share of active (not completed) tickets per technician, in percent."""

    names = [name for name in dict.fromkeys(technicians) if name != NOT_ASSIGNED]
    active = filtered[filtered["Status"] != Status.COMPLETED.value]
    total_active = len(active)
    counts = active["Technician"].value_counts()
    values = [
        (int(counts.get(name, 0)) / total_active * 100) if total_active else 0.0
        for name in names
    ]
    return _bar_frame(names, values)


def avg_processing_time_by_technician(
    filtered: pd.DataFrame, technicians: List[str]
) -> pd.DataFrame:
    names = [name for name in dict.fromkeys(technicians) if name != NOT_ASSIGNED]
    resolved = filtered[_resolved_mask(filtered) & (filtered["Technician"] != NOT_ASSIGNED)]
    means = resolved.groupby("Technician")["Processing Days"].mean()
    values = [float(means.get(name, 0.0)) for name in names]
    return _bar_frame(names, values)


def format_bar_value(value: float, suffix: str = "") -> str:
    if float(value) % 1 == 0:
        return f"{value:.0f}{suffix}"
    return f"{_round_half_up(value):.1f}{suffix}"
