import datetime
from typing import Dict, List

import pandas as pd
import streamlit as st

import config
from calculator import BBFSCalculator, export_all, export_chunk
from data_handler import HistoryStore
from permutation_engine import analyze
from pricing import CostCalculator, default_price_table
from result_filters import FilterConfig, results_frame
from utils import clean_digits, clean_price_input, ensure_state_dir, setup_logging
from visualization import BBFSVisualizer

# Page configuration
st.set_page_config(page_title="BBFS Calculator", page_icon="🎲", layout="wide")
st.title("🎲 BBFS Calculator")

setup_logging()
ensure_state_dir(config.STATE_DIR)

# Sidebar
st.sidebar.header("Navigation")
page = st.sidebar.radio("Go to", ["BBFS Calculator", "Database", "Archive", "Matrix"], index=0)

# Initialize components
store = HistoryStore()
calculator = BBFSCalculator()
visualizer = BBFSVisualizer()

state = st.session_state
state.setdefault("calc_mode", "BBFS")
state.setdefault("calculated_digits", "")
state.setdefault("active_poltar", ["", "", "", "", ""])
state.setdefault("copied_index", 0)
state.setdefault("prices", default_price_table())


@st.cache_data(show_spinner=False)
def bbfs_cached(digits: str) -> Dict[str, Dict[str, List[str]]]:
    return calculator.generate_bbfs(digits)


if page == "BBFS Calculator":
    c1, c2 = st.columns(2)
    with c1:
        st.subheader("BBFS input")
        raw = st.text_input("Digits", value=state.calculated_digits, placeholder="e.g. 12366")
        if st.button("Generate BBFS", type="primary"):
            state.calculated_digits = clean_digits(raw)
            state.calc_mode = "BBFS"
            state.copied_index = 0
        ms = analyze(state.calculated_digits)
        if ms.distinct_digits:
            st.caption(f"Distinct: {''.join(ms.distinct_digits)} · Repeated: {''.join(ms.repeated_digits) or '-'}")
    with c2:
        st.subheader("Poltar (5 positions)")
        poltar = [st.text_input(f"P{i + 1}", value=state.active_poltar[i], key=f"poltar_{i}") for i in range(5)]
        if st.button("Generate Poltar"):
            state.active_poltar = [clean_digits(p) for p in poltar]
            state.calc_mode = "POLTAR"
            state.copied_index = 0

    st.sidebar.header("Filters")
    selected_dims = st.sidebar.multiselect("Dimensions", list(config.DIMENSIONS), default=list(config.DIMENSIONS))
    cfg = FilterConfig(
        show_single=st.sidebar.checkbox("Single", value=True),
        show_twin=st.sidebar.checkbox("Twin", value=True),
        show_twin_plus=st.sidebar.checkbox("Twin+", value=True),
        show_small=st.sidebar.checkbox("Small (0-4)", value=True),
        show_mix=st.sidebar.checkbox("Mix", value=True),
        show_large=st.sidebar.checkbox("Large (5-9)", value=True),
        history_filter=st.sidebar.selectbox("History", list(config.HISTORY_FILTERS), index=0),
    )

    if state.calc_mode == "BBFS":
        results = bbfs_cached(state.calculated_digits)
    else:
        results = calculator.generate_poltar(state.active_poltar)

    signatures = store.history_signatures()
    filtered = calculator.filter_results(results, cfg, signatures)
    result_list = calculator.result_list(filtered, selected_dims)
    summary = calculator.summary(filtered, selected_dims)

    st.header(f"Results ({state.calc_mode})")
    s1, s2 = st.columns(2)
    with s1:
        st.dataframe(summary, use_container_width=True)
    with s2:
        st.plotly_chart(visualizer.plot_summary(summary), use_container_width=True)

    st.subheader("Export")
    copy_limit = st.select_slider("Chunk size", options=list(config.COPY_LIMIT_OPTIONS), value=config.COPY_LIMIT)
    st.write(f"Exported {min(state.copied_index, len(result_list))} of {len(result_list)}")
    e1, e2, e3 = st.columns(3)
    with e1:
        if st.button("Next chunk") and result_list:
            text, state.copied_index = export_chunk(result_list, state.copied_index, copy_limit)
            st.code(text or "(nothing left)")
    with e2:
        if st.button("All") and result_list:
            st.code(export_all(result_list))
            state.copied_index = len(result_list)
    with e3:
        if st.button("Reset cursor"):
            state.copied_index = 0
    frame = results_frame({d: filtered[d] for d in selected_dims}, signatures)
    st.download_button("Download results (CSV)", frame.to_csv(index=False).encode("utf-8"),
                       file_name="bbfs_results.csv", mime="text/csv")

    st.subheader("Cost estimate")
    with st.expander("Prices"):
        for dim in config.DIMENSIONS:
            cols = st.columns(len(config.RESULT_CLASSES) * len(config.PRICE_TIERS))
            i = 0
            for cls in config.RESULT_CLASSES:
                for tier in config.PRICE_TIERS:
                    detail = state.prices[dim][cls]
                    value = cols[i].text_input(f"{dim} {cls} {tier}", value=str(detail.get(tier)),
                                               key=f"price_{dim}_{cls}_{tier}")
                    detail.set(tier, clean_price_input(value))
                    i += 1
    costs = CostCalculator(prices=state.prices)
    cost_frame = costs.cost_frame(filtered, selected_dims)
    st.dataframe(cost_frame.pivot_table(index=["type", "class"], columns="tier", values="cost", aggfunc="sum"),
                 use_container_width=True)
    st.write("Totals:", costs.totals(filtered, selected_dims))
    st.plotly_chart(visualizer.plot_costs(cost_frame), use_container_width=True)

elif page == "Database":
    st.header("Draw history")
    with st.form("add_entry"):
        f1, f2, f3, f4 = st.columns(4)
        new_date = f1.date_input("Date", value=datetime.date.today())
        new_slot = f2.selectbox("Slot", list(config.TIME_SLOTS))
        new_result = f3.text_input("Result")
        new_bbfs = f4.text_input("BBFS (optional, defaults to sorted result)")
        if st.form_submit_button("Add to database"):
            try:
                store.add_entry(new_date.isoformat(), new_slot, new_result, new_bbfs or None)
                st.success("Database updated.")
            except ValueError as e:
                st.error(str(e))

    term = st.text_input("Search")
    hits = store.search(term)
    st.dataframe(pd.DataFrame([e.to_dict() for e in hits]), use_container_width=True)
    st.caption(f"Active entries: {len(store.combined_entries())}")

    custom_ids = [e.id for e in store.entries]
    d1, d2 = st.columns(2)
    with d1:
        to_delete = st.selectbox("Delete custom entry", [""] + custom_ids)
        if st.button("Delete") and to_delete:
            store.delete_entry(to_delete)
            st.success(f"Deleted {to_delete}.")
    with d2:
        if st.button("Wipe all custom data"):
            store.wipe()
            st.success("Custom data wiped; baseline kept.")

elif page == "Archive":
    st.header("Historical archive")
    st.dataframe(store.archive_grid(), use_container_width=True)

    st.subheader("Repeated BBFS sets")
    dupes = store.duplicate_tracking()
    if dupes:
        st.dataframe(pd.DataFrame(sorted(dupes.items()), columns=["date|slot", "occurrence"]),
                     use_container_width=True)
    else:
        st.info("No repeated sets.")

    st.subheader(f"Top ranking status (since {config.HISTORY_THRESHOLD})")
    status = store.top_rank_status()
    st.write(f"Out: {int(status['is_out'].sum())} / {len(status)}")
    c1, c2 = st.columns(2)
    with c1:
        st.dataframe(status, use_container_width=True)
    with c2:
        st.plotly_chart(visualizer.plot_top_rank_status(status), use_container_width=True)

else:
    st.header("Matrix tracking")
    field = st.radio("Source", ["result", "digits"], horizontal=True)
    slots = st.multiselect("Slots", list(config.TIME_SLOTS), default=list(config.TIME_SLOTS))
    matrix = store.position_matrix(field=field, slots=slots)
    st.plotly_chart(visualizer.plot_position_matrix(matrix), use_container_width=True)
    st.dataframe(pd.DataFrame(matrix, index=[f"P{i + 1}" for i in range(matrix.shape[0])]),
                 use_container_width=True)
