import streamlit as st

from domain.constants import GREEN, LEVELS, RED, YELLOW
from services import admin as admin_svc, auditions as audition_svc, session
from ui.components import call_api, club_header, color_badge, level_badge
from services.attendance import level_color

STATE_KEY = "deliberation"
_CONSISTENCY_COLORS = {"High": GREEN, "Moderate": YELLOW, "Low": RED}
_MARKS = {"lowest": ("LOWEST", RED), "highest": ("HIGHEST", GREEN)}


def _load(client, audition_id):
    """Scored dancers plus the working assignment, kept across reruns for one audition."""
    dancers = audition_svc.dancers_with_scores(client, audition_id)
    dancers.sort(key=lambda d: d.average_score, reverse=True)
    state = st.session_state.get(STATE_KEY)
    if not state or state["audition_id"] != audition_id:
        state = {"audition_id": audition_id,
                 "deliberation": audition_svc.load_deliberation(client, audition_id, dancers)}
        st.session_state[STATE_KEY] = state
    return dancers, state["deliberation"]


def _render_counts(delib):
    cols = st.columns(len(LEVELS))
    for col, (level, count) in zip(cols, delib.level_counts.items()):
        col.markdown(color_badge(f"{level}: {count}", level_color(level)), unsafe_allow_html=True)


def _render_level_statistics(dancers, delib):
    stats = audition_svc.level_statistics(dancers, delib)
    if not stats:
        return
    with st.expander("📈 Score variance by level"):
        cols = st.columns(len(stats))
        for col, (level, s) in zip(cols, stats.items()):
            with col:
                st.markdown(f"{level_badge(level)} "
                            f"{color_badge(s['consistency'], _CONSISTENCY_COLORS[s['consistency']])}",
                            unsafe_allow_html=True)
                st.caption(f"{s['count']} dancers · range {s['min']:.2f} - {s['max']:.2f}")
                st.markdown(
                    f"Mean **{s['mean']:.2f}** · Median {s['median']:.2f}  \n"
                    f"25th {s['p25']:.2f} · 75th {s['p75']:.2f}  \n"
                    f"Std dev {s['std_dev']:.2f}"
                )


def _render_judge_scores(dancer, dancers):
    stats = admin_svc.member_stats(dancer, dancers)
    if stats:
        c1, c2, c3 = st.columns(3)
        c1.metric("Ranking", f"#{stats['rank']}")
        c2.metric("Percentile", f"{stats['percentile']}th", stats["percentile_label"], delta_color="off")
        c3.metric("Agreement", stats["agreement"], f"SD {stats['std_dev']:.2f}", delta_color="off")
    rows = audition_svc.judge_breakdown(dancer)
    if not rows:
        st.caption("No scores submitted yet")
        return
    for row in rows:
        mark = ""
        if row["mark"]:
            label, color = _MARKS[row["mark"]]
            mark = color_badge(label, color)
        parts = " · ".join(f"{cat.capitalize()} {value:g}" for cat, value in row["scores"].items())
        st.markdown(f"**{row['judge']}**: {row['total']:.1f} {mark}<br><small>{parts}</small>",
                    unsafe_allow_html=True)
        if row["comments"]:
            st.caption(f"💬 {row['comments']}")


def _render_dancer(d, dancers, delib, position):
    current = delib.assignments.get(d.id, LEVELS[0])
    up, down, *cols = st.columns([1, 1, 1, 4, 2, 3, 2])
    if up.button("▲", key=f"delib_up_{d.id}", disabled=position == 0):
        delib.shift(d.id, -1, dancers)
        st.rerun()
    if down.button("▼", key=f"delib_down_{d.id}", disabled=position == len(dancers) - 1):
        delib.shift(d.id, 1, dancers)
        st.rerun()
    cols[0].markdown(f"**#{d.audition_number}**")
    cols[1].markdown(f"{d.name}<br><small>avg {d.average_score:.2f}</small>", unsafe_allow_html=True)
    cols[2].markdown(level_badge(current), unsafe_allow_html=True)
    chosen = cols[3].selectbox("Level", LEVELS, index=LEVELS.index(current) if current in LEVELS else 0,
                               key=f"delib_level_{d.id}", label_visibility="collapsed")
    if chosen != current:
        delib.move(d.id, chosen)
        st.rerun()
    is_confirmed = d.id in delib.confirmed
    if cols[4].button("✅ Confirmed" if is_confirmed else "Confirm", key=f"delib_confirm_{d.id}"):
        delib.toggle_confirmed(d.id)
        st.rerun()
    with st.expander("Judge scores"):
        _render_judge_scores(d, dancers)


def view():
    client = session.client()
    audition_id = st.query_params.get("audition")
    if not audition_id:
        ok, auditions = call_api(audition_svc.list_auditions, client)
        current = audition_svc.current_audition(auditions) if ok else None
        audition_id = current.id if current else None
    if not audition_id:
        st.info("No audition selected.")
        return

    club_header("Deliberations", "Place each dancer into a level, then confirm")
    ok, data = call_api(_load, client, audition_id)
    if not ok:
        return
    dancers, delib = data
    if not dancers:
        st.info("No scored dancers for this audition.")
        return

    _render_counts(delib)
    confirmed = len(delib.confirmed & {d.id for d in dancers})
    st.progress(confirmed / len(dancers), text=f"{confirmed} of {len(dancers)} confirmed")
    _render_level_statistics(dancers, delib)

    for position, d in enumerate(delib.ordered(dancers)):
        _render_dancer(d, dancers, delib, position)

    c1, c2, c3 = st.columns(3)
    if c1.button("Reset to automatic split"):
        st.session_state[STATE_KEY]["deliberation"] = audition_svc.Deliberation(
            assignments=audition_svc.auto_assign(dancers))
        for d in dancers:
            st.session_state.pop(f"delib_level_{d.id}", None)
        st.rerun()
    if c2.button("Sort by score", disabled=not delib.order):
        delib.order = []
        st.rerun()
    if c3.button("Submit deliberations", type="primary"):
        ok, _ = call_api(audition_svc.submit_deliberation, client, audition_id, delib, dancers,
                         success="Deliberations submitted!")
        if ok:
            st.session_state.pop(STATE_KEY, None)
            session.navigate("audition", audition=audition_id)
