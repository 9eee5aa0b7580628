import os

import streamlit as st
import api as API
from components import show_json, show_table

st.title("🛠️ Admin")

# ------------------------
# Session state
# ------------------------
if "admin_password" not in st.session_state:
    st.session_state.admin_password = None

if not st.session_state.admin_password:
    pw = st.text_input("Admin password", type="password", value=os.getenv("ADMIN_PASSWORD", ""))
    if st.button("Log in", key="btn_login"):
        try:
            if API.login(pw):
                st.session_state.admin_password = pw
                st.rerun()
            else:
                st.error("Invalid password")
        except Exception as e:
            st.error(e)
    st.stop()

password = st.session_state.admin_password

# ------------------------
# Upload
# ------------------------
st.subheader("Upload shows")
st.caption("CSV or Excel, up to 10 MB. Columns: circus name, venue name, address, city, state, zip, "
           "coords (\"lat, lon\") or latitude/longitude, show date.")
up = st.file_uploader("Show file", type=["csv", "xls", "xlsx"], key="upload_file")
if up and st.button("Upload", key="btn_upload"):
    try:
        resp = API.upload(up.name, up.getvalue(), up.type, password)
        if resp.get("success"):
            st.success(resp["message"])
        else:
            st.error(resp.get("message") or resp)
    except Exception as e:
        st.error(e)

st.divider()

# ------------------------
# History
# ------------------------
st.subheader("Upload history")
try:
    history = API.uploads()
except Exception as e:
    st.error(e)
    history = []

show_table(history)
names = sorted({u["file_name"] for u in history})
if names:
    c1, c2 = st.columns([3, 1])
    with c1:
        victim = st.selectbox("File", names, key="del_file")
    with c2:
        if st.button("🗑️ Delete file and its shows", key="btn_delete"):
            try:
                show_json(API.delete_upload(victim, password))
                st.rerun()
            except Exception as e:
                st.error(e)

if st.button("Log out", key="btn_logout"):
    st.session_state.admin_password = None
    st.rerun()
