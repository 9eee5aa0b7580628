# client/components.py
import streamlit as st
import pandas as pd

def show_table(rows, caption: str | None = None, columns: list[str] | None = None):
    """Render a list[dict] as a dataframe; otherwise show JSON."""
    if caption:
        st.caption(caption)
    if isinstance(rows, list):
        if rows and isinstance(rows[0], dict):
            df = pd.DataFrame(rows)
            if columns:
                df = df[[c for c in columns if c in df.columns]]
            st.dataframe(df, use_container_width=True)
        else:
            st.write(rows)
    else:
        st.write(rows)

def show_map(shows: list[dict], zoom: int = 3):
    """Plot shows on a map from their `coords` pairs."""
    if not shows:
        st.info("No shows on this date.")
        return
    df = pd.DataFrame(
        [{"lat": s["coords"][0], "lon": s["coords"][1]} for s in shows]
    )
    st.map(df, zoom=zoom)

def show_json(obj, caption: str | None = None):
    if caption:
        st.caption(caption)
    st.json(obj)
