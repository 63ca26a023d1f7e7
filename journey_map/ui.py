import pandas as pd
import streamlit as st

from .config import ANOMALY_THRESHOLD, JOURNEYS_PATH, MAX_JOURNEYS
from .errors import JourneyValidationError
from .insights import summarise
from .loader import load_journeys
from .models import JourneyStore
from .pipeline import render
from .stats import StationIndex
from .styling import RenderOptions, is_alert
from .surface import MapSurface
from .viz import score_histogram


@st.cache_data(show_spinner=False)
def get_store(path: str) -> JourneyStore:
    return load_journeys(path)


def flagged_table(store: JourneyStore, threshold: float) -> pd.DataFrame:
    rows = [
        {
            "Start": j.start_station,
            "End": j.end_station,
            "Duration": j.total_duration,
            "Score": j.score,
        }
        for j in store
        if is_alert(j, threshold)
    ]
    df = pd.DataFrame(rows, columns=["Start", "End", "Duration", "Score"])
    return df.sort_values("Score", ascending=False).reset_index(drop=True)


def render_legend():
    st.markdown("""
    <div style="display: flex; gap: 20px; justify-content: center; margin-top: 12px; font-size: 0.75rem; color: rgba(255,255,255,0.6);">
        <span><span style="display: inline-block; width: 10px; height: 10px; background: #ff4444; border-radius: 50%; margin-right: 6px;"></span>Anomalous</span>
        <span><span style="display: inline-block; width: 10px; height: 10px; background: #00ff88; border-radius: 50%; margin-right: 6px;"></span>Normal</span>
        <span><span style="display: inline-block; width: 10px; height: 10px; background: #ffa500; border-radius: 50%; margin-right: 6px;"></span>Not scored</span>
    </div>
    """, unsafe_allow_html=True)


def main():
    st.set_page_config(
        page_title="🚲 Bike Journey Anomalies",
        page_icon="🚲",
        layout="wide"
    )

    st.title("🚲 Bike Journey Anomalies")
    st.markdown("""
    **Scored bike-share journeys across London.**
    Journeys scoring above the threshold are drawn in red; click a marker for an explanation.
    """)

    # Sidebar for rendering options
    with st.sidebar:
        st.header("⚙️ Rendering")
        threshold = st.number_input(
            "Anomaly threshold",
            value=float(ANOMALY_THRESHOLD),
            step=0.01,
            format="%.2f",
        )
        max_journeys = st.number_input(
            "Journeys to render",
            min_value=1,
            value=MAX_JOURNEYS,
            step=1000,
        )
        flagged_lines_only = st.checkbox("Only draw anomalous journeys", value=False)
        require_score = st.checkbox("Hide journeys without a score", value=False)
        marker_at_end = st.checkbox("Mark journey ends too", value=False)
        use_index = st.checkbox("Pre-index stations (faster)", value=True)

    try:
        store = get_store(JOURNEYS_PATH)
    except FileNotFoundError:
        st.error(f"❌ Journey data not found at `{JOURNEYS_PATH}`. Set JOURNEYS_PATH in your .env.")
        return
    except JourneyValidationError as e:
        st.error(f"❌ Journey data is invalid: {e.error_count} error(s).")
        st.code("\n".join(e.messages[:20]))
        return

    store = store.head(int(max_journeys))
    options = RenderOptions(
        threshold=threshold,
        require_score_for_line=require_score,
        flagged_lines_only=flagged_lines_only,
        marker_at_end=marker_at_end,
    )

    with st.spinner(f"🔄 Rendering {len(store)} journeys..."):
        surface = MapSurface()
        aggregator = StationIndex(store.journeys) if use_index else None
        pipeline = render(store, surface, options, aggregator)
        surface.mark_ready()
        deck = surface.to_deck()

    st.pydeck_chart(deck, height=700)
    render_legend()

    st.divider()

    # Collection insights
    st.header("📊 Insights")
    insights = summarise(store, threshold)
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("🚲 Journeys", insights.journey_count)
    with col2:
        st.metric("🧮 Scored", insights.scored_count)
    with col3:
        st.metric("🚨 Anomalous", insights.flagged_count)
    with col4:
        st.metric("📍 Lines drawn", pipeline.summary.lines)

    if insights.journey_count:
        col1, col2 = st.columns(2)
        with col1:
            station, count = insights.most_common_start
            st.markdown(f"**Most common start:** {station} ({count} journeys)")
            station, count = insights.least_common_start
            st.markdown(f"**Least common start:** {station} ({count} journeys)")
            st.markdown(
                f"**Shortest journey:** {insights.shortest.start_station} → "
                f"{insights.shortest.end_station} ({insights.shortest.duration_seconds:.0f} s)"
            )
        with col2:
            station, count = insights.most_common_end
            st.markdown(f"**Most common end:** {station} ({count} journeys)")
            station, count = insights.least_common_end
            st.markdown(f"**Least common end:** {station} ({count} journeys)")
            st.markdown(
                f"**Longest journey:** {insights.longest.start_station} → "
                f"{insights.longest.end_station} ({insights.longest_days:.2f} days)"
            )

    chart = score_histogram(store, threshold)
    if chart:
        st.plotly_chart(chart, use_container_width=True)
    else:
        st.warning("⚠️ No journey in this collection has a score.")

    st.header("🚨 Anomalous Journeys")
    st.dataframe(flagged_table(store, threshold), use_container_width=True)
