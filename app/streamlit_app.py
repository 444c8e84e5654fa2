import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import io
import time

import streamlit as st

from classtime.errors import InfeasibleScheduleError, InvalidDatabaseError, SchedulerError
from classtime.io_utils import ClassStore, dump_database, load_database, new_class_record
from classtime.models import MAX_ATTEMPTS, MAX_CLASSES
from classtime.parsing import build_class_specs
from classtime.render import grid_to_frame, grids_to_long_frame
from classtime.scheduling.evaluation import overloaded_resources, summary
from classtime.scheduling.placement import generate_timetables

STORE_PATH = os.environ.get("CLASSTIME_STORE", os.path.join(os.getcwd(), "classtime_store.json"))

# ---------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------
st.set_page_config(page_title="ClassTime – Timetables", layout="wide")
st.title("ClassTime – Weekly Timetable Generator")

store = ClassStore(STORE_PATH)
if "records" not in st.session_state:
    st.session_state.records = store.load(default_empty=True)
    st.session_state.results = None


def _save():
    store.save(st.session_state.records)


# ---------------------------------------------------------------------
# Import / export
# ---------------------------------------------------------------------
c1, c2, c3 = st.columns(3)
upload = c1.file_uploader("Import DB (JSON list of classes)", type=["json", "txt"])
if upload is not None and st.session_state.get("_imported") != upload.file_id:
    try:
        st.session_state.records = load_database(io.BytesIO(upload.getvalue()))
        st.session_state.results = None
        st.session_state._imported = upload.file_id
        _save()
        st.success(f"Database loaded successfully! {len(st.session_state.records)} classes loaded.")
    except InvalidDatabaseError as e:
        st.error(str(e))
c2.download_button("Export DB", dump_database(st.session_state.records),
                   file_name="database.json", mime="application/json")
if c3.button("+ Add Class", disabled=len(st.session_state.records) >= MAX_CLASSES):
    n = len(st.session_state.records) + 1
    st.session_state.records.append(new_class_record(n))
    _save()

# ---------------------------------------------------------------------
# Class editor
# ---------------------------------------------------------------------
st.subheader("Setup Classes")
st.caption("Changes are saved automatically.")
for rec in list(st.session_state.records):
    with st.expander(rec.name or "(unnamed)", expanded=True):
        rec.name = st.text_input("Class Name", rec.name, key=f"name_{rec.id}")
        rec.subjectsRaw = st.text_input("Subjects & Count (e.g. Math:5, English:4)", rec.subjectsRaw,
                                        key=f"subj_{rec.id}")
        a, b = st.columns(2)
        rec.teachersRaw = a.text_input("Teachers (e.g. Math:Mr.A)", rec.teachersRaw, key=f"teach_{rec.id}")
        rec.roomsRaw = b.text_input("Rooms (Optional)", rec.roomsRaw, key=f"room_{rec.id}")
        if len(st.session_state.records) > 1 and st.button("Remove", key=f"rm_{rec.id}"):
            st.session_state.records = [r for r in st.session_state.records if r.id != rec.id]
            _save()
            st.rerun()
_save()

attempts = st.number_input("Attempt budget", 1, 100_000, MAX_ATTEMPTS, step=500)

# ---------------------------------------------------------------------
# Generate
# ---------------------------------------------------------------------
if st.button("Generate Timetables", type="primary"):
    t0 = time.perf_counter()
    classes = []
    try:
        classes = build_class_specs(st.session_state.records)
        with st.spinner("Generating..."):
            result = generate_timetables(classes, max_attempts=int(attempts))
        st.session_state.results = (classes, result, time.perf_counter() - t0)
    except InfeasibleScheduleError as e:
        st.session_state.results = None
        st.error(str(e))
        for (kind, name), load in overloaded_resources(classes):
            st.warning(f"{kind} {name} is asked for {load} periods a week.")
    except SchedulerError as e:
        st.session_state.results = None
        st.error(str(e))

# ---------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------
if st.session_state.results:
    classes, result, elapsed = st.session_state.results
    st.subheader("Generated Timetables")
    st.text(summary(classes, result.grids, attempts=result.attempts))
    st.caption(f"Total time: {elapsed:.3f}s")
    for sg in result.grids:
        st.markdown(f"**{sg.class_name}** · Weekly Schedule")
        st.dataframe(grid_to_frame(sg), use_container_width=True)
    st.download_button("Download timetables.csv", grids_to_long_frame(result.grids).to_csv(index=False),
                       file_name="timetables.csv", mime="text/csv")
