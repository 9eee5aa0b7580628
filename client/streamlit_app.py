# client/streamlit_app.py
import time
from datetime import date, datetime, timedelta

import streamlit as st

import api as API
from components import show_map, show_table

st.set_page_config(page_title="Circus Show Map", layout="wide")
st.title("🎪 Circus Show Map")

def _to_date(s: str) -> date:
    return datetime.fromisoformat(s).date()

try:
    rng = API.date_range()
except Exception as e:
    st.error(f"API unavailable: {e}")
    st.stop()

start, end = _to_date(rng["start_date"]), _to_date(rng["end_date"])
if end <= start:  # slider needs a non-empty range
    end = start + timedelta(days=1)
if "cursor" not in st.session_state or not (start <= st.session_state.cursor <= end):
    st.session_state.cursor = start
if "playing" not in st.session_state:
    st.session_state.playing = False

# ------------------------
# Timeline
# ------------------------
c1, c2 = st.columns([5, 1])
with c1:
    day = st.slider("Date", min_value=start, max_value=end, value=st.session_state.cursor, format="MMM D, YYYY")
    st.session_state.cursor = day
with c2:
    label = "⏸ Pause" if st.session_state.playing else "▶️ Play"
    if st.button(label, key="btn_play"):
        st.session_state.playing = not st.session_state.playing
        st.rerun()

shows = API.shows_on(day.isoformat())
st.caption(f"{len(shows)} show(s) on {day:%b %d, %Y}")
show_map(shows)
show_table(shows, columns=["circus_name", "venue_name", "city", "state", "address"])

with st.sidebar:
    st.header("Venues")
    try:
        show_table(API.venues(), columns=["venue_name", "city", "state", "start_date", "end_date", "show_count"])
    except Exception as e:
        st.error(e)

# Advance one day per tick while playing; stop at the end of the range
if st.session_state.playing:
    time.sleep(0.7)
    nxt = day + timedelta(days=1)
    if nxt > end:
        st.session_state.playing = False
    else:
        st.session_state.cursor = nxt
    st.rerun()
