from __future__ import annotations

import os

import requests
import streamlit as st

st.set_page_config(page_title="Hospital", layout="wide")

API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8080")



# HTTP client

def api_get(path: str) -> dict | list:
    r = requests.get(f"{API_BASE}{path}", timeout=10)
    r.raise_for_status()
    return r.json()


def api_post(path: str, payload: dict) -> dict:
    r = requests.post(f"{API_BASE}{path}", json=payload, timeout=10)
    r.raise_for_status()
    return r.json()


def api_put(path: str, payload: dict) -> dict:
    r = requests.put(f"{API_BASE}{path}", json=payload, timeout=10)
    r.raise_for_status()
    return r.json()


def api_delete(path: str) -> dict:
    r = requests.delete(f"{API_BASE}{path}", timeout=10)
    r.raise_for_status()
    return r.json()



# Sidebar

with st.sidebar:
    st.header("Backend")
    try:
        health = requests.get(f"{API_BASE}/health", timeout=5)
        if health.status_code == 200:
            st.success("Store OK")
        else:
            st.error("Store error (db_error)")
    except requests.RequestException as e:
        st.error(f"API not reachable: {e}")

    st.divider()
    st.caption(f"API: {API_BASE}")



# UI

st.title("Hospital Management")

tab1, tab2, tab3 = st.tabs(["Doctors", "Patients", "Chart"])



# TAB 1 - Doctors

with tab1:
    st.subheader("Doctors")

    with st.expander("Add doctor"):
        c1, c2 = st.columns(2)
        name = c1.text_input("Name", key="doc_name")
        specialty = c2.text_input("Specialty", key="doc_specialty")

        if st.button("Create doctor", key="doc_submit"):
            if not name.strip():
                st.error("Name is required.")
            else:
                try:
                    res = api_post("/api/doctors", {"name": name.strip(), "specialty": specialty.strip()})
                    st.success(f"Doctor created: {res.get('id')}")
                except Exception as e:
                    st.error(str(e))

    st.divider()

    try:
        doctors = api_get("/api/doctors")
    except Exception as e:
        st.error(f"Error loading doctors: {e}")
        doctors = []

    if not doctors:
        st.info("No doctors yet.")
    for d in doctors:
        c1, c2 = st.columns([5, 1])
        c1.write(f"**#{d['id']}** {d['name']} | {d['specialty'] or '-'}")
        if c2.button("Delete", key=f"doc_del_{d['id']}"):
            try:
                res = api_delete(f"/api/doctors/{d['id']}")
                st.warning(f"Doctor deleted, {res.get('unassigned', 0)} patient(s) unassigned.")
                st.rerun()
            except Exception as e:
                st.error(str(e))



# TAB 2 - Patients

with tab2:
    st.subheader("Patients")

    try:
        doctors = api_get("/api/doctors")
        doctors_ok = True
    except Exception as e:
        st.error(f"Error loading doctors: {e}")
        doctors = []
        doctors_ok = False
    # 0 = unassigned
    doctor_options = [{"id": 0, "name": "Unassigned"}] + doctors

    with st.expander("Add patient"):
        c1, c2 = st.columns(2)
        name = c1.text_input("Name", key="pat_name")
        ailment = c2.text_input("Ailment", key="pat_ailment")
        doctor = st.selectbox(
            "Doctor",
            options=doctor_options,
            format_func=lambda d: d["name"],
            key="pat_doctor",
        )

        if st.button("Create patient", key="pat_submit"):
            if not name.strip():
                st.error("Name is required.")
            else:
                try:
                    res = api_post(
                        "/api/patients",
                        {"name": name.strip(), "ailment": ailment.strip(), "doctor_id": doctor["id"]},
                    )
                    st.success(f"Patient created: {res.get('id')}")
                except Exception as e:
                    st.error(str(e))

    st.divider()

    try:
        patients = api_get("/api/patients")
    except Exception as e:
        st.error(f"Error loading patients: {e}")
        patients = []

    if not patients:
        st.info("No patients yet.")
    for p in patients:
        c1, c2, c3, c4 = st.columns([4, 2, 1, 1])
        c1.write(f"**#{p['id']}** {p['name']} | {p['ailment'] or '-'} | {p.get('doctor_name') or 'Unassigned'}")

        # without the doctor list there is nothing safe to offer
        if doctors_ok:
            options = doctor_options
            if all(d["id"] != p["doctor_id"] for d in options):
                # keep dangling references selectable as they are
                options = options + [{"id": p["doctor_id"], "name": f"#{p['doctor_id']} (missing)"}]
            current = next(i for i, d in enumerate(options) if d["id"] == p["doctor_id"])

            new_doctor = c2.selectbox(
                "Doctor",
                options=options,
                index=current,
                format_func=lambda d: d["name"],
                key=f"pat_assign_{p['id']}",
                label_visibility="collapsed",
            )
            if c3.button("Assign", key=f"pat_assign_btn_{p['id']}") and new_doctor["id"] != p["doctor_id"]:
                try:
                    api_put(
                        f"/api/patients/{p['id']}",
                        {"name": p["name"], "ailment": p["ailment"], "doctor_id": new_doctor["id"]},
                    )
                    st.rerun()
                except Exception as e:
                    st.error(str(e))

        if c4.button("Delete", key=f"pat_del_{p['id']}"):
            try:
                api_delete(f"/api/patients/{p['id']}")
                st.rerun()
            except Exception as e:
                st.error(str(e))



# TAB 3 - Chart

with tab3:
    st.subheader("Patients per doctor")

    try:
        chart = api_get("/api/chart")
        if not chart.get("labels"):
            st.info("No doctors yet.")
        else:
            st.bar_chart({"doctor": chart["labels"], "patients": chart["counts"]}, x="doctor", y="patients")
    except Exception as e:
        st.error(f"Error loading chart: {e}")
