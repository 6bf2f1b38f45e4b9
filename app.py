import logging

import streamlit as st
from recoverystats.config import Settings
from recoverystats.const import SYSTEMIC_FATIGUE_THRESHOLD
from recoverystats.data_loader import WorkoutHistoryLoader
from recoverystats.exercise_stats import build_target_map, compute_exercise_stats, list_exercises, summarize_progress
from recoverystats.log import setup_logging
from recoverystats.recovery import estimate_recovery
from recoverystats.visualizations import RecoveryVisualizer

# Page Config
st.set_page_config(page_title="RecoveryStats", page_icon="🏋️‍♂️", layout="wide")

settings = Settings.from_env()
setup_logging(settings.log_format, settings.log_level)
logger = logging.getLogger(__name__)

@st.cache_data
def load_data(data_dir):
    loader = WorkoutHistoryLoader(data_dir)
    try:
        loader.load_all()
        return loader
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load data from %s: %s", data_dir, e)
        return None

loader = load_data(str(settings.data_dir))

if not loader or loader.entries is None:
    st.error(f"Failed to load data. Please check `{settings.data_dir}/` folder.")
    st.stop()

history = loader.entries

# Sidebar
st.sidebar.title("RecoveryStats")
st.sidebar.markdown("Muscle recovery from your logged workouts.")
st.sidebar.caption(f"{len(history)} logged exercises")

# Recomputed on every rerun, against the current time
report = estimate_recovery(history)
viz = RecoveryVisualizer(report)

st.title("Recovery")

# KPI Row
col1, col2, col3 = st.columns(3)
col1.metric("Readiness", f"{report.global_readiness}%")
col2.metric("Not Ready", report.fatigued_count)
col3.metric("Tracked Muscles", len(report.muscle_status))

if report.global_readiness < SYSTEMIC_FATIGUE_THRESHOLD:
    st.warning(report.recommendation)
else:
    st.info(report.recommendation)

c_gauge, c_bars = st.columns([1, 2])
with c_gauge:
    st.plotly_chart(viz.create_readiness_gauge(), use_container_width=True)
with c_bars:
    st.plotly_chart(viz.create_recovery_chart(), use_container_width=True)

with st.expander("Muscle Details"):
    st.dataframe(report.to_frame().drop(columns=['color']), use_container_width=True, hide_index=True)

st.divider()

# Exercise Analysis
st.subheader("Exercise Analysis 📈")

exercises = list_exercises(history)
if not exercises:
    st.info("No exercises logged yet.")
    selected_exercise = None
else:
    # Initialize or Validate Session State for Navigation
    if 'selected_exercise_nav' not in st.session_state:
        st.session_state.selected_exercise_nav = exercises[0]
    elif st.session_state.selected_exercise_nav not in exercises:
        st.session_state.selected_exercise_nav = exercises[0]

    # Navigation Callbacks
    def prev_ex():
        curr_idx = exercises.index(st.session_state.selected_exercise_nav)
        st.session_state.selected_exercise_nav = exercises[(curr_idx - 1) % len(exercises)]

    def next_ex():
        curr_idx = exercises.index(st.session_state.selected_exercise_nav)
        st.session_state.selected_exercise_nav = exercises[(curr_idx + 1) % len(exercises)]

    # Layout: [ < ] [ Selectbox ] [ > ]
    c1, c2, c3 = st.columns([1, 10, 1])
    with c1:
        st.write("")
        st.write("")
        st.button("⬅️", on_click=prev_ex, help="Previous Exercise")
    with c2:
        selected_exercise = st.selectbox("Select Exercise", exercises, key='selected_exercise_nav')
    with c3:
        st.write("")
        st.write("")
        st.button("➡️", on_click=next_ex, help="Next Exercise")

if selected_exercise:
    stats = compute_exercise_stats(history, selected_exercise)

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Best e1RM", f"{stats.max_1rm:.0f} kg")
    k2.metric("Best Session Volume", f"{stats.max_volume:,.0f} kg")
    k3.metric("Total Reps", stats.total_reps)
    k4.metric("Sessions", stats.session_count)

    summary = summarize_progress(stats.progression['estimated_1rm'])
    if summary:
        st.caption(
            f"Start {summary.start:.0f} kg → Current {summary.current:.0f} kg "
            f"({summary.percentage_change:+.1f}%), All-time high {summary.all_time_high:.0f} kg"
        )

    meta = loader.get_exercise_meta(selected_exercise)
    if meta.get('target_muscle'):
        target_map = build_target_map(meta['target_muscle'], meta.get('secondary_muscles', []))
        st.plotly_chart(viz.create_target_map_chart(target_map), use_container_width=True)

    fig_prog = viz.create_exercise_progression_chart(stats, selected_exercise)
    if fig_prog and len(stats.progression) > 1:
        st.plotly_chart(fig_prog, use_container_width=True)
    else:
        st.info("Log at least two weighted sessions to see a progression chart.")
