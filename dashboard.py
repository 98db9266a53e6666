"""
Reports dashboard for helpdesk tickets.

Run with: streamlit run dashboard.py
"""

import html
import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import urlparse

import altair as alt
import pandas as pd
import streamlit as st
import streamlit_shadcn_ui as ui

from reports import (
    ALL,
    DEFAULT_FILTERS,
    STATUSES,
    TIME_RANGE_LABELS,
    ReportFilters,
    ReportStats,
    User,
    area_options,
    avg_processing_time_by_technician,
    compute_stats,
    empty_ticket_frame,
    filter_tickets,
    format_bar_value,
    prepare_ticket_frame,
    reference_date,
    technician_names,
    technician_workload,
    tickets_by_area,
    tickets_by_technician,
    tickets_frame_from_records,
    users_from_records,
)
from supabase_utils import (
    ANON_KEY_OVERRIDE_KEY,
    URL_OVERRIDE_KEY,
    SupabaseSettings,
    clear_overrides,
    fetch_table,
    has_overrides,
    init_client,
    resolve_settings,
    set_overrides,
    supabase_disabled,
)


logger = logging.getLogger(__name__)

DATA_DIR = Path(os.getenv("REPORT_DATA_DIR") or Path(__file__).parent / "data")
TICKETS_TABLE = "tickets"
USERS_TABLE = "users"

FILTER_STATE_KEYS = {
    "time_range": "report_time_range",
    "area": "report_area",
    "status": "report_status",
    "technician": "report_technician",
}

CHART_AXIS_LABEL_COLOR = "rgba(226, 220, 255, 0.78)"
CHART_AXIS_TITLE_COLOR = "rgba(201, 189, 255, 0.82)"
CHART_GRID_COLOR = "rgba(132, 110, 238, 0.22)"
CHART_DOMAIN_COLOR = "rgba(164, 142, 255, 0.45)"
CHART_VIEW_FILL = "rgba(18, 12, 42, 0.78)"
CHART_VALUE_COLOR = "#f2eeff"
DEFAULT_BAR_COLOR = "#9c7aff"


def _apply_chart_theme(chart: alt.LayerChart, *, title: str, height: int = 300) -> alt.LayerChart:
    configured = (
        chart.properties(title=title, height=height, background="transparent")
        .configure_view(fill=CHART_VIEW_FILL, stroke=None)
        .configure_axis(
            labelColor=CHART_AXIS_LABEL_COLOR,
            titleColor=CHART_AXIS_TITLE_COLOR,
            gridColor=CHART_GRID_COLOR,
            tickColor=CHART_DOMAIN_COLOR,
            domainColor=CHART_DOMAIN_COLOR,
            labelLimit=140,
        )
        .configure_title(
            color="#f2eeff",
            font="Inter",
            fontSize=16,
            anchor="start",
            fontWeight=600,
        )
    )
    return configured


def _horizontal_gradient(start: str, end: str) -> alt.Gradient:
    return alt.Gradient(
        gradient="linear",
        stops=[
            alt.GradientStop(color=start, offset=0),
            alt.GradientStop(color=end, offset=1),
        ],
        x1=0,
        x2=1,
        y1=0,
        y2=0,
    )


def _metric_icon_svg(icon_key: str) -> str:
    icons = {
        "tickets": """
<svg viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <linearGradient id="metric-tickets-gradient" x1="4" y1="20" x2="20" y2="4" gradientUnits="userSpaceOnUse">
      <stop offset="0" stop-color="#d7c8ff"/>
      <stop offset="1" stop-color="#7a54ff"/>
    </linearGradient>
  </defs>
  <path d="M7 3h7l5 5v12a1 1 0 0 1-1 1H7a1 1 0 0 1-1-1V4a1 1 0 0 1 1-1Z" fill="none" stroke="url(#metric-tickets-gradient)" stroke-width="1.8" stroke-linejoin="round"/>
  <path d="M9 12h6M9 16h6" stroke="url(#metric-tickets-gradient)" stroke-width="1.8" stroke-linecap="round"/>
</svg>
""",
        "completed": """
<svg viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <linearGradient id="metric-completed-gradient" x1="4" y1="20" x2="20" y2="4" gradientUnits="userSpaceOnUse">
      <stop offset="0" stop-color="#9dffcf"/>
      <stop offset="1" stop-color="#3fd68f"/>
    </linearGradient>
  </defs>
  <circle cx="12" cy="12" r="9" stroke="url(#metric-completed-gradient)" stroke-width="2" fill="none"/>
  <path d="m8.5 12.5 2.3 2.3 4.7-5.3" fill="none" stroke="url(#metric-completed-gradient)" stroke-width="2" stroke-linecap="round" stroke-linejoin="round"/>
</svg>
""",
        "overdue": """
<svg viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <linearGradient id="metric-overdue-gradient" x1="4" y1="20" x2="20" y2="4" gradientUnits="userSpaceOnUse">
      <stop offset="0" stop-color="#ffb2c0"/>
      <stop offset="1" stop-color="#ff5a7a"/>
    </linearGradient>
  </defs>
  <path d="M12 4 2.8 19.5h18.4Z" fill="none" stroke="url(#metric-overdue-gradient)" stroke-width="1.8" stroke-linejoin="round"/>
  <path d="M12 10v4.2M12 17h.01" stroke="url(#metric-overdue-gradient)" stroke-width="2" stroke-linecap="round"/>
</svg>
""",
        "time": """
<svg viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <linearGradient id="metric-time-gradient" x1="4" y1="20" x2="20" y2="4" gradientUnits="userSpaceOnUse">
      <stop offset="0" stop-color="#ffd8a0"/>
      <stop offset="1" stop-color="#ffb562"/>
    </linearGradient>
  </defs>
  <circle cx="12" cy="12" r="9" stroke="url(#metric-time-gradient)" stroke-width="2" fill="none"/>
  <path d="M12 7v5l3 2" stroke="url(#metric-time-gradient)" stroke-width="2" stroke-linecap="round" stroke-linejoin="round"/>
</svg>
""",
    }
    return icons.get(icon_key, icons["tickets"])


def _hero_pill(label: str) -> str:
    return f"<span class='hero-pill'><span class='hero-pill__label'>{html.escape(label)}</span></span>"


def _inject_theme() -> None:
    st.markdown(
        """
        <style>
            .stApp {
                background: radial-gradient(120% 120% at 0% 0%, rgba(149, 110, 255, 0.16), transparent 45%),
                            radial-gradient(100% 120% at 100% 0%, rgba(85, 53, 214, 0.26), transparent 55%),
                            linear-gradient(180deg, #060313 0%, #0d0720 55%, #120b2b 100%);
                color: #f4f1ff;
                font-family: 'Inter', sans-serif;
            }

            .stApp [data-testid="stToolbar"] {
                display: none;
            }

            .section-title {
                font-size: 1.35rem;
                letter-spacing: 0.01em;
                margin: 2.2rem 0 1rem;
                color: #f1edff;
            }

            [data-testid="stSidebar"] {
                background: linear-gradient(200deg, rgba(33, 22, 78, 0.98) 0%, rgba(15, 10, 40, 0.98) 100%);
                border-right: 1px solid rgba(146, 119, 255, 0.45);
            }

            .sidebar-section-title {
                font-weight: 600;
                font-size: 0.78rem;
                letter-spacing: 0.18em;
                text-transform: uppercase;
                color: rgba(204, 195, 255, 0.8);
                margin-bottom: 0.75rem;
            }

            .hero-wrapper {
                background: linear-gradient(135deg, rgba(33, 21, 79, 0.85), rgba(14, 7, 36, 0.92));
                border: 1px solid rgba(132, 111, 255, 0.35);
                border-radius: 28px;
                padding: 2.2rem 2.5rem;
                box-shadow: 0 32px 60px rgba(10, 6, 32, 0.55);
                margin-bottom: 1.8rem;
            }

            .hero-kicker {
                display: inline-flex;
                padding: 0.28rem 0.7rem;
                border-radius: 999px;
                background: rgba(92, 70, 205, 0.35);
                border: 1px solid rgba(153, 131, 255, 0.55);
                font-size: 0.7rem;
                text-transform: uppercase;
                letter-spacing: 0.22em;
                margin-bottom: 0.9rem;
                color: #dcd4ff;
            }

            .hero-wrapper h1 {
                font-size: 2.1rem;
                font-weight: 700;
                margin: 0 0 0.6rem;
                color: #ffffff;
            }

            .hero-pills {
                margin-top: 1.2rem;
                display: flex;
                flex-wrap: wrap;
                gap: 0.65rem;
            }

            .hero-pill {
                padding: 0.5rem 0.95rem;
                border-radius: 999px;
                background: linear-gradient(145deg, rgba(27, 19, 66, 0.92), rgba(15, 10, 42, 0.88));
                border: 1px solid rgba(155, 133, 255, 0.38);
            }

            .hero-pill__label {
                letter-spacing: 0.06em;
                text-transform: uppercase;
                color: rgba(233, 226, 255, 0.85);
                font-size: 0.74rem;
            }

            .filter-badges {
                display: flex;
                flex-wrap: wrap;
                gap: 0.5rem;
                margin-top: 0.4rem;
            }

            .filter-badge {
                padding: 0.25rem 0.7rem;
                border-radius: 999px;
                font-size: 0.75rem;
                background: rgba(119, 96, 255, 0.25);
                border: 1px solid rgba(170, 152, 255, 0.5);
                color: #ece6ff;
            }

            .metric-grid {
                display: grid;
                grid-template-columns: repeat(auto-fit, minmax(220px, 1fr));
                gap: 1.2rem;
            }

            .metric-card {
                position: relative;
                border-radius: 22px;
                padding: 1.4rem 1.6rem;
                background: rgba(19, 14, 44, 0.9);
                border: 1px solid rgba(116, 96, 226, 0.4);
                overflow: hidden;
                box-shadow: 0 14px 36px rgba(6, 3, 23, 0.45);
                --metric-accent: rgba(156, 122, 255, 0.6);
                --metric-soft: rgba(140, 114, 255, 0.25);
                --metric-border: rgba(170, 152, 255, 0.35);
            }

            .metric-card::after {
                content: "";
                position: absolute;
                inset: 12px -30px auto auto;
                width: 120px;
                height: 120px;
                border-radius: 50%;
                background: radial-gradient(circle at center, var(--metric-accent), transparent 65%);
                opacity: 0.35;
            }

            .metric-icon {
                width: 44px;
                height: 44px;
                border-radius: 14px;
                display: grid;
                place-items: center;
                background: linear-gradient(145deg, var(--metric-soft), rgba(116, 88, 249, 0.15));
                border: 1px solid var(--metric-border);
                margin-bottom: 0.8rem;
            }

            .metric-icon svg {
                width: 24px;
                height: 24px;
            }

            .metric-value {
                font-size: 1.8rem;
                font-weight: 700;
                color: #f9f8ff;
            }

            .metric-label {
                font-size: 0.85rem;
                letter-spacing: 0.08em;
                text-transform: uppercase;
                color: rgba(215, 205, 255, 0.75);
            }

            .metric-caption {
                margin-top: 0.35rem;
                font-size: 0.85rem;
                color: rgba(222, 217, 255, 0.6);
            }

            .chart-card__title {
                font-size: 1.05rem;
                font-weight: 600;
                color: #f0ecff;
                margin-bottom: 0.6rem;
            }

            .no-data-placeholder {
                min-height: 200px;
                display: flex;
                align-items: center;
                justify-content: center;
                border-radius: 22px;
                border: 1px dashed rgba(126, 103, 236, 0.4);
                color: rgba(222, 217, 255, 0.6);
                margin-bottom: 1.6rem;
            }

            .stAlert {
                border-radius: 18px;
                border: 1px solid rgba(132, 111, 255, 0.35);
                background: rgba(19, 14, 48, 0.8);
                color: #f1edff;
            }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _load_local_data(data_dir: Path) -> Tuple[pd.DataFrame, List[User]]:
    tickets_path = data_dir / "tickets.csv"
    users_path = data_dir / "users.csv"

    if tickets_path.exists():
        raw = pd.read_csv(tickets_path, dtype=str, keep_default_na=False)
        tickets = prepare_ticket_frame(raw)
    else:
        tickets = empty_ticket_frame()

    users: List[User] = []
    if users_path.exists():
        raw_users = pd.read_csv(users_path, dtype=str, keep_default_na=False)
        users = users_from_records(raw_users.to_dict("records"))

    return tickets, users


@dataclass
class ReportDataBundle:
    tickets: pd.DataFrame
    users: List[User]
    errors: List[str]
    source: str


def _local_bundle(errors: List[str], data_dir: str) -> ReportDataBundle:
    tickets, users = _load_local_data(Path(data_dir))
    return ReportDataBundle(tickets=tickets, users=users, errors=errors, source="local")


@st.cache_data(show_spinner=True)
def load_report_data(
    url: str, anon_key: str, data_dir: str = str(DATA_DIR), cache_bust: int = 0
) -> ReportDataBundle:
    """Fetch tickets and users from Supabase, falling back to the CSVs in ``data_dir``."""

    if supabase_disabled():
        return _local_bundle(["Supabase disabled via SUPABASE_DISABLE"], data_dir)

    settings = SupabaseSettings(url=url, anon_key=anon_key)
    client = init_client(settings.url, settings.anon_key)
    if client is None:
        errors = [] if settings.is_empty else ["Supabase configuration is incomplete or invalid."]
        return _local_bundle(errors, data_dir)

    try:
        ticket_rows = fetch_table(TICKETS_TABLE, client=client)
        user_rows = fetch_table(USERS_TABLE, client=client)
    except Exception as exc:
        logger.warning("Falling back to local data: %s", exc)
        return _local_bundle([str(exc)], data_dir)

    return ReportDataBundle(
        tickets=tickets_frame_from_records(ticket_rows),
        users=users_from_records(user_rows),
        errors=[],
        source="supabase",
    )


def _invalidate_data_cache() -> None:
    load_report_data.clear()
    st.session_state["data_cache_bust"] = st.session_state.get("data_cache_bust", 0) + 1


def _render_header(bundle: ReportDataBundle, today: date) -> None:
    ticket_count = len(bundle.tickets)
    technician_count = len(technician_names(bundle.users))
    source_line = "Supabase live" if bundle.source == "supabase" else "Local fallback mode"
    pills = "".join(
        [
            _hero_pill(f"{ticket_count:,} tickets loaded"),
            _hero_pill(f"{technician_count} technician{'s' if technician_count != 1 else ''}"),
            _hero_pill(source_line),
            _hero_pill(f"Reference date {today.strftime('%d.%m.%Y')}"),
        ]
    )
    st.markdown(
        f"""
        <div class="hero-wrapper">
            <span class="hero-kicker">Service Desk</span>
            <h1>Reports &amp; Analytics</h1>
            <div class="hero-pills">{pills}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def connection_panel(bundle: ReportDataBundle) -> None:
    with st.sidebar:
        st.markdown("<div class='sidebar-section-title'>Connection</div>", unsafe_allow_html=True)

        if supabase_disabled():
            st.info("Supabase is disabled; the dashboard shows bundled data.")
            return

        settings = resolve_settings()
        if bundle.source == "supabase":
            host = urlparse(settings.url).netloc or settings.url
            st.success(f"Connected to {host}")
        else:
            st.warning("No Supabase connection; showing bundled data.")

        with st.form("connection_override_form"):
            url_value = st.text_input(
                "Supabase URL override",
                value=st.session_state.get(URL_OVERRIDE_KEY, ""),
                placeholder="https://<project>.supabase.co",
            )
            key_value = st.text_input(
                "Anon key override",
                value=st.session_state.get(ANON_KEY_OVERRIDE_KEY, ""),
                type="password",
            )
            submitted = st.form_submit_button("Save override")

        if submitted:
            set_overrides(url_value, key_value)
            _invalidate_data_cache()
            st.rerun()

        if has_overrides() and st.button("Clear override", key="clear_connection_override"):
            clear_overrides()
            _invalidate_data_cache()
            st.rerun()


def _current_filters() -> ReportFilters:
    return ReportFilters(
        **{attr: st.session_state[key] for attr, key in FILTER_STATE_KEYS.items()}
    )


def _ensure_filter_state(options: dict) -> None:
    defaults = DEFAULT_FILTERS
    for attr, key in FILTER_STATE_KEYS.items():
        value = st.session_state.get(key)
        if value is None or value not in options[attr]:
            st.session_state[key] = getattr(defaults, attr)


def reset_filters() -> None:
    defaults = _current_filters().reset()
    for attr, key in FILTER_STATE_KEYS.items():
        st.session_state[key] = getattr(defaults, attr)


def _option_label(value: str) -> str:
    return "All" if value == ALL else value


def render_filter_bar(areas: List[str], technicians: List[str]) -> ReportFilters:
    options = {
        "time_range": list(TIME_RANGE_LABELS),
        "area": [ALL] + areas,
        "status": [ALL] + STATUSES,
        "technician": [ALL] + technicians,
    }
    _ensure_filter_state(options)

    time_col, area_col, status_col, tech_col, reset_col = st.columns([1.2, 1, 1, 1, 0.7])
    with time_col:
        st.selectbox(
            "Time range",
            options=options["time_range"],
            format_func=TIME_RANGE_LABELS.get,
            key=FILTER_STATE_KEYS["time_range"],
        )
    with area_col:
        st.selectbox(
            "Area", options=options["area"], format_func=_option_label, key=FILTER_STATE_KEYS["area"]
        )
    with status_col:
        st.selectbox(
            "Status",
            options=options["status"],
            format_func=_option_label,
            key=FILTER_STATE_KEYS["status"],
        )
    with tech_col:
        st.selectbox(
            "Technician",
            options=options["technician"],
            format_func=_option_label,
            key=FILTER_STATE_KEYS["technician"],
        )
    with reset_col:
        st.button("Reset", key="reset_report_filters", on_click=reset_filters)

    filters = _current_filters()
    active = filters.active_categories()
    if active:
        badges = "".join(
            f"<span class='filter-badge'>{html.escape(label)}: {html.escape(value)}</span>"
            for label, value in active.items()
        )
        st.markdown(f"<div class='filter-badges'>{badges}</div>", unsafe_allow_html=True)
    return filters


def stat_cards(stats: ReportStats) -> None:
    metric_data = [
        {
            "title": "Total tickets",
            "value": f"{stats.total:,}",
            "description": "In selected period",
            "icon_svg": _metric_icon_svg("tickets"),
            "accent": "rgba(176, 148, 255, 0.68)",
            "soft": "rgba(164, 135, 255, 0.22)",
            "border": "rgba(205, 186, 255, 0.48)",
        },
        {
            "title": "Completed",
            "value": f"{stats.completed:,}",
            "description": "In selected period",
            "icon_svg": _metric_icon_svg("completed"),
            "accent": "rgba(110, 240, 180, 0.65)",
            "soft": "rgba(90, 220, 160, 0.22)",
            "border": "rgba(140, 240, 190, 0.45)",
        },
        {
            "title": "Overdue",
            "value": f"{stats.overdue:,}",
            "description": "Currently overdue tickets",
            "icon_svg": _metric_icon_svg("overdue"),
            "accent": "rgba(255, 120, 150, 0.65)",
            "soft": "rgba(255, 110, 140, 0.22)",
            "border": "rgba(255, 160, 180, 0.45)",
        },
        {
            "title": "Processing time (avg)",
            "value": f"{stats.avg_processing_days:.1f} days",
            "description": "For completed tickets",
            "icon_svg": _metric_icon_svg("time"),
            "accent": "rgba(255, 204, 140, 0.68)",
            "soft": "rgba(255, 189, 102, 0.22)",
            "border": "rgba(255, 217, 167, 0.45)",
        },
    ]

    cards_html = "".join(
        (
            f"<div class=\"metric-card\" style=\"--metric-accent: {spec['accent']}; --metric-soft: {spec['soft']}; --metric-border: {spec['border']};\">"
            f"<div class=\"metric-icon\">{spec['icon_svg']}</div>"
            f"<div class=\"metric-label\">{spec['title']}</div>"
            f"<div class=\"metric-value\">{spec['value']}</div>"
            f"<div class=\"metric-caption\">{spec['description']}</div>"
            "</div>"
        )
        for spec in metric_data
    )

    st.markdown(f"<div class='metric-grid'>{cards_html}</div>", unsafe_allow_html=True)


def _horizontal_bar_chart(
    data: pd.DataFrame,
    title: str,
    bar_color=None,
    value_suffix: str = "",
):
    data = data.assign(Display=[format_bar_value(value, value_suffix) for value in data["Value"]])
    max_value = max([float(value) for value in data["Value"]] + [1.0])
    base = alt.Chart(data)

    x_axis = alt.X("Value:Q", title=None, scale=alt.Scale(domain=[0, max_value]))
    y_axis = alt.Y("Label:N", sort=None, title=None)
    encoding = dict(
        x=x_axis,
        y=y_axis,
        tooltip=[
            alt.Tooltip("Label:N", title="Name"),
            alt.Tooltip("Display:N", title="Value"),
        ],
    )
    mark_options = dict(size=16, cornerRadiusTopRight=4, cornerRadiusBottomRight=4)
    if "Color" in data.columns:
        encoding["color"] = alt.Color("Color:N", scale=None, legend=None)
    else:
        mark_options["color"] = bar_color or DEFAULT_BAR_COLOR

    bars = base.mark_bar(**mark_options).encode(**encoding)
    labels = base.mark_text(align="left", dx=6, color=CHART_VALUE_COLOR).encode(
        x=x_axis,
        y=y_axis,
        text=alt.Text("Display:N"),
    )
    return _apply_chart_theme(bars + labels, title=title, height=max(120, 34 * len(data)))


def _chart_card(
    data: pd.DataFrame,
    title: str,
    bar_color=None,
    value_suffix: str = "",
) -> None:
    if data.empty:
        st.markdown(f"<div class='chart-card__title'>{html.escape(title)}</div>", unsafe_allow_html=True)
        st.markdown("<div class='no-data-placeholder'>No data available.</div>", unsafe_allow_html=True)
        return
    st.altair_chart(
        _horizontal_bar_chart(data, title, bar_color=bar_color, value_suffix=value_suffix),
        use_container_width=True,
    )


def build_charts(filtered: pd.DataFrame, technicians: List[str]) -> None:
    area_col, technician_col = st.columns([3, 2], gap="large")
    with area_col:
        _chart_card(
            tickets_by_area(filtered),
            "Top 8 areas by ticket volume",
            bar_color=_horizontal_gradient("#fd7e14", "#dc3545"),
        )
    with technician_col:
        _chart_card(tickets_by_technician(filtered, technicians), "Tickets per technician")
        _chart_card(
            technician_workload(filtered, technicians),
            "Workload share (active tickets)",
            bar_color=_horizontal_gradient("#198754", "#0d6efd"),
            value_suffix="%",
        )

    _chart_card(
        avg_processing_time_by_technician(filtered, technicians),
        "Average processing time per technician (days)",
        value_suffix=" days",
    )


def reports_view(tickets: pd.DataFrame, users: List[User], today: Optional[date] = None) -> None:
    today = today or reference_date()
    technicians = technician_names(users)

    st.markdown("<div class='section-title'>Filters</div>", unsafe_allow_html=True)
    filters = render_filter_bar(area_options(tickets), technicians)
    filtered = filter_tickets(tickets, filters, today)

    st.markdown("<div class='section-title'>Key Metrics</div>", unsafe_allow_html=True)
    stat_cards(compute_stats(filtered))

    st.markdown("<div class='section-title'>Distribution</div>", unsafe_allow_html=True)
    build_charts(filtered, technicians)


def main():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    st.set_page_config(page_title="Ticket Reports", layout="wide")
    _inject_theme()

    settings = resolve_settings()
    cache_bust = st.session_state.get("data_cache_bust", 0)
    bundle = load_report_data(settings.url, settings.anon_key, str(DATA_DIR), cache_bust)
    today = reference_date()

    _render_header(bundle, today)
    connection_panel(bundle)

    if bundle.source == "local":
        ui.alert(
            title="Offline mode",
            description="Supabase unavailable. Loaded bundled CSV data instead.",
            key="local-warning",
        )
    for index, issue in enumerate(bundle.errors, start=1):
        ui.alert(title="Dataset issue", description=issue, key=f"dataset-issue-{index}")

    if bundle.tickets.empty:
        ui.alert(
            title="No data to display",
            description="No tickets were loaded from Supabase or the bundled data directory.",
            key="no-data-alert",
        )

    reports_view(bundle.tickets, bundle.users, today)


if __name__ == "__main__":
    main()
