from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from reports import (
    ALL,
    DEFAULT_REFERENCE_DATE,
    ReportFilters,
    User,
    area_options,
    avg_processing_time_by_technician,
    compute_stats,
    filter_tickets,
    format_bar_value,
    parse_german_date,
    prepare_ticket_frame,
    reference_date,
    technician_names,
    technician_workload,
    tickets_by_area,
    tickets_by_technician,
    tickets_frame_from_records,
)

ROOT = Path(__file__).resolve().parents[1]
TODAY = date(2026, 2, 7)
TECHNICIANS = ["Anna", "Ben", "Cleo", "Dora"]


def ticket(entry, completion="N/A", status="Open", area="Library", technician="Anna"):
    return {
        "Entry Date": entry,
        "Completion Date": completion,
        "Status": status,
        "Area": area,
        "Technician": technician,
    }


def frame(*rows) -> pd.DataFrame:
    return prepare_ticket_frame(pd.DataFrame(list(rows)))


ALL_TIME = ReportFilters(time_range=ALL)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("01.01.2026", date(2026, 1, 1)),
        (" 07.02.2026 ", date(2026, 2, 7)),
        ("1.2.2026", date(2026, 2, 1)),
        ("N/A", None),
        ("", None),
        (None, None),
        (float("nan"), None),
        ("2026-01-01", None),
        ("31.02.2026", None),
        ("aa.bb.cccc", None),
    ],
)
def test_parse_german_date(raw, expected):
    assert parse_german_date(raw) == expected


def test_processing_time_of_ten_days():
    tickets = frame(ticket("01.01.2026", "11.01.2026", status="Completed"))
    stats = compute_stats(filter_tickets(tickets, ALL_TIME, TODAY))
    assert stats.avg_processing_days == 10.0
    assert tickets.loc[0, "Processing Days"] == 10.0


def test_average_rounds_to_one_decimal_and_skips_missing_dates():
    tickets = frame(
        ticket("01.01.2026", "02.01.2026", status="Completed"),
        ticket("01.01.2026", "03.01.2026", status="Completed"),
        ticket("01.01.2026", "03.01.2026", status="Completed"),
        ticket("01.01.2026", "N/A", status="Completed"),
        ticket("01.01.2026", "30.01.2026", status="Open"),
    )
    stats = compute_stats(tickets)
    assert stats.total == 5
    assert stats.completed == 4
    assert stats.avg_processing_days == 1.7


def test_average_rounds_halves_up():
    tickets = frame(
        ticket("01.01.2026", "02.01.2026", status="Completed"),
        ticket("01.01.2026", "02.01.2026", status="Completed"),
        ticket("01.01.2026", "02.01.2026", status="Completed"),
        ticket("01.01.2026", "03.01.2026", status="Completed"),
    )
    assert compute_stats(tickets).avg_processing_days == 1.3


def test_stats_counts_completed_and_overdue():
    tickets = frame(
        ticket("01.02.2026", status="Overdue"),
        ticket("01.02.2026", status="Overdue"),
        ticket("01.02.2026", "03.02.2026", status="Completed"),
        ticket("01.02.2026", status="In Progress"),
    )
    stats = compute_stats(tickets)
    assert (stats.total, stats.completed, stats.overdue) == (4, 1, 2)
    assert stats.avg_processing_days == 2.0


def test_stats_of_empty_selection():
    tickets = frame(ticket("01.02.2026"))
    stats = compute_stats(filter_tickets(tickets, ReportFilters(area="Gym"), TODAY))
    assert (stats.total, stats.completed, stats.overdue) == (0, 0, 0)
    assert stats.avg_processing_days == 0.0


def test_default_filters_never_grow_the_selection():
    raw = pd.read_csv(ROOT / "data" / "tickets.csv", dtype=str, keep_default_na=False)
    tickets = prepare_ticket_frame(raw)
    filtered = filter_tickets(tickets, ReportFilters(), TODAY)
    assert len(filtered) <= len(tickets)
    assert len(filtered) == 11


def test_unparseable_entry_date_only_passes_unbounded_range():
    tickets = frame(ticket("N/A"), ticket("05.02.2026"))
    for time_range in ("7d", "30d", "90d"):
        filtered = filter_tickets(tickets, ReportFilters(time_range=time_range), TODAY)
        assert list(filtered["Entry Date"]) == ["05.02.2026"]
    filtered = filter_tickets(tickets, ALL_TIME, TODAY)
    assert list(filtered["Entry Date"]) == ["N/A", "05.02.2026"]


def test_range_cutoff_is_inclusive():
    tickets = frame(ticket("08.01.2026"), ticket("07.01.2026"), ticket("01.02.2026"))
    filtered = filter_tickets(tickets, ReportFilters(time_range="30d"), TODAY)
    assert list(filtered["Entry Date"]) == ["08.01.2026", "01.02.2026"]

    filtered = filter_tickets(tickets, ReportFilters(time_range="7d"), TODAY)
    assert list(filtered["Entry Date"]) == ["01.02.2026"]


def test_unknown_time_range_is_rejected():
    with pytest.raises(ValueError):
        filter_tickets(frame(ticket("01.02.2026")), ReportFilters(time_range="365d"), TODAY)


def test_categorical_filters_match_exactly():
    tickets = frame(
        ticket("01.02.2026", status="Open", area="Gym", technician="Anna"),
        ticket("01.02.2026", status="Overdue", area="Gym", technician="Ben"),
        ticket("01.02.2026", status="Open", area="Gym Hall", technician="Anna"),
        ticket("01.02.2026", status="Open", area="Library", technician="N/A"),
    )
    assert len(filter_tickets(tickets, ReportFilters(area="Gym"), TODAY)) == 2
    assert len(filter_tickets(tickets, ReportFilters(status="Open"), TODAY)) == 3
    assert len(filter_tickets(tickets, ReportFilters(technician="N/A"), TODAY)) == 1
    combined = ReportFilters(area="Gym", status="Open", technician="Anna")
    assert len(filter_tickets(tickets, combined, TODAY)) == 1


def test_reset_restores_defaults():
    filters = ReportFilters(time_range="7d", area="Gym", status="Overdue", technician="Ben")
    reset = filters.reset()
    assert reset.time_range == "30d"
    assert (reset.area, reset.status, reset.technician) == (ALL, ALL, ALL)
    assert reset.active_categories() == {}
    assert filters.active_categories() == {
        "Area": "Gym",
        "Status": "Overdue",
        "Technician": "Ben",
    }


def test_tickets_by_area_keeps_top_eight():
    rows = []
    for index in range(1, 10):
        rows.extend(ticket("01.02.2026", area=f"Area {index}") for _ in range(index))
    data = tickets_by_area(frame(*rows))
    assert len(data) == 8
    assert list(data["Label"]) == [f"Area {index}" for index in range(9, 1, -1)]
    assert list(data["Value"]) == list(range(9, 1, -1))


def test_tickets_by_area_ties_keep_first_appearance():
    data = tickets_by_area(
        frame(ticket("01.02.2026", area="Gym"), ticket("01.02.2026", area="Attic"))
    )
    assert list(data["Label"]) == ["Gym", "Attic"]


def test_tickets_by_technician_includes_idle_technicians():
    tickets = frame(
        ticket("01.02.2026", technician="Ben"),
        ticket("01.02.2026", technician="Anna"),
        ticket("01.02.2026", technician="Ben"),
        ticket("01.02.2026", technician="N/A"),
        ticket("01.02.2026", technician="Former Employee"),
    )
    data = tickets_by_technician(tickets, TECHNICIANS)
    assert dict(zip(data["Label"], data["Value"])) == {"Ben": 2, "Anna": 1, "Cleo": 0, "Dora": 0}
    assert list(data["Label"]) == ["Ben", "Anna", "Cleo", "Dora"]
    assert list(data["Color"]) == ["#0d6efd", "#6f42c1", "#dc3545", "#fd7e14"]


def test_workload_shares_sum_to_one_hundred():
    tickets = frame(
        ticket("01.02.2026", status="Open", technician="Anna"),
        ticket("01.02.2026", status="Overdue", technician="Anna"),
        ticket("01.02.2026", status="In Progress", technician="Ben"),
        ticket("01.02.2026", "02.02.2026", status="Completed", technician="Cleo"),
    )
    data = technician_workload(tickets, TECHNICIANS)
    shares = dict(zip(data["Label"], data["Value"]))
    assert set(shares) == set(TECHNICIANS)
    assert shares["Anna"] == pytest.approx(200 / 3)
    assert shares["Ben"] == pytest.approx(100 / 3)
    assert shares["Cleo"] == 0
    assert sum(shares.values()) == pytest.approx(100)


def test_workload_is_zero_without_active_tickets():
    tickets = frame(ticket("01.02.2026", "02.02.2026", status="Completed", technician="Anna"))
    data = technician_workload(tickets, TECHNICIANS)
    assert list(data["Value"]) == [0.0, 0.0, 0.0, 0.0]
    assert list(data["Label"]) == TECHNICIANS


def test_avg_processing_time_by_technician():
    tickets = frame(
        ticket("01.01.2026", "11.01.2026", status="Completed", technician="Anna"),
        ticket("01.01.2026", "03.01.2026", status="Completed", technician="Anna"),
        ticket("01.01.2026", "04.01.2026", status="Completed", technician="Ben"),
        ticket("01.01.2026", "30.01.2026", status="Completed", technician="N/A"),
        ticket("01.01.2026", "N/A", status="Completed", technician="Cleo"),
        ticket("01.01.2026", "20.01.2026", status="Open", technician="Dora"),
    )
    data = avg_processing_time_by_technician(tickets, TECHNICIANS)
    assert dict(zip(data["Label"], data["Value"])) == {
        "Anna": 6.0,
        "Ben": 3.0,
        "Cleo": 0.0,
        "Dora": 0.0,
    }
    assert list(data["Label"][:2]) == ["Anna", "Ben"]


def test_technician_names_only_keeps_technicians():
    users = [
        User(name="Anna", role="Technician"),
        User(name="Sabine", role="Admin"),
        User(name="Ben", role="Technician"),
        User(name="Anna", role="Technician"),
        User(name="Paul", role="Reporter"),
    ]
    assert technician_names(users) == ["Anna", "Ben"]


def test_records_are_normalised():
    tickets = tickets_frame_from_records(
        [
            {"id": 7, "entryDate": "01.02.2026", "status": "Open", "area": "Gym"},
            {"id": 8, "entry_date": None, "status": "Completed", "technician": "Ben"},
        ]
    )
    assert list(tickets["Technician"]) == ["N/A", "Ben"]
    assert tickets.loc[0, "Entry Parsed"] == pd.Timestamp(2026, 2, 1)
    assert pd.isna(tickets.loc[1, "Entry Parsed"])
    assert area_options(tickets) == ["Gym"]


def test_empty_records_give_empty_frame():
    tickets = tickets_frame_from_records([])
    assert tickets.empty
    assert compute_stats(tickets).total == 0
    assert tickets_by_area(tickets).empty


def test_default_filters_on_empty_frame_give_zero_stats():
    filtered = filter_tickets(tickets_frame_from_records([]), ReportFilters(), TODAY)
    stats = compute_stats(filtered)
    assert (stats.total, stats.completed, stats.overdue, stats.avg_processing_days) == (0, 0, 0, 0.0)
    assert technician_workload(filtered, TECHNICIANS)["Value"].tolist() == [0.0] * 4


@pytest.mark.parametrize(
    "value, suffix, expected",
    [
        (3, "", "3"),
        (2.5, " days", "2.5 days"),
        (100 / 3, "%", "33.3%"),
        (0.0, "%", "0%"),
        (0.25, "", "0.3"),
        (1.25, " days", "1.3 days"),
    ],
)
def test_format_bar_value(value, suffix, expected):
    assert format_bar_value(value, suffix) == expected


def test_reference_date_from_environment(monkeypatch):
    monkeypatch.delenv("REPORT_REFERENCE_DATE", raising=False)
    assert reference_date() == DEFAULT_REFERENCE_DATE

    monkeypatch.setenv("REPORT_REFERENCE_DATE", "2026-03-01")
    assert reference_date() == date(2026, 3, 1)

    monkeypatch.setenv("REPORT_REFERENCE_DATE", "next tuesday")
    assert reference_date() == DEFAULT_REFERENCE_DATE
