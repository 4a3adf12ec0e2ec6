# demo.py
# ------------------------------------------------------------
# Streamlit UI for the earnings-call transcript cleaner
# - Paste raw transcript -> Clean (job + progress bar)
# - Follow-up passes: Verify Speakers, Segment, Check Names
# - Add Disclaimers, token counter, change log, download
# Run the API first: python run_server.py
# ------------------------------------------------------------

from datetime import datetime

import streamlit as st

from transcript_cleaner.clients.cleaner_api import (
    LARGE_TRANSCRIPT_CHARS,
    CleanerAPI,
    CleanerAPIError,
)
from transcript_cleaner.utils.postprocess import newlines_to_br

api = CleanerAPI()

st.set_page_config(page_title="Transcript Cleaner", layout="wide", page_icon="📝")
st.title("📝 Earnings Call Transcript Cleaner")

# ------------------------------------------------------------
# Session persistence
# ------------------------------------------------------------
if "cleaned" not in st.session_state:
    st.session_state.cleaned = ""
if "tokens" not in st.session_state:
    st.session_state.tokens = 0
if "change_log" not in st.session_state:
    st.session_state.change_log = []
if "has_disclaimers" not in st.session_state:
    st.session_state.has_disclaimers = False


def log_change(title, changes):
    st.session_state.change_log.append(
        {"title": title, "time": datetime.now().strftime("%H:%M:%S"), "changes": changes}
    )


def reset_state():
    st.session_state.cleaned = ""
    st.session_state.tokens = 0
    st.session_state.change_log = []
    st.session_state.has_disclaimers = False


def clear_all():
    # on_click runs before the text_area is drawn, so its key can be reset here
    reset_state()
    st.session_state.raw_box = ""


# ------------------------------------------------------------
# Input
# ------------------------------------------------------------
col_in, col_out = st.columns([1, 1])

with col_in:
    st.subheader("Raw Transcript")
    raw = st.text_area("Paste the raw transcript here...", height=500, key="raw_box")
    c1, c2 = st.columns([1, 1])
    process_btn = c1.button("🧹 Clean Transcript")
    c2.button("🗑️ Clear", on_click=clear_all)

if process_btn:
    if not raw.strip():
        st.warning("Please paste a transcript first.")
    else:
        bar = st.progress(0.0, text="Starting...")

        def on_progress(current, total, message):
            pct = current / total if total else 0.0
            bar.progress(min(pct, 1.0), text=f"{message} ({current} / {total})")

        try:
            result = api.clean(raw, on_progress=on_progress)
            reset_state()
            st.session_state.cleaned = result["cleaned_transcript"]
            st.session_state.tokens = result.get("tokens_used", 0)
            changes = [
                'Removed standalone "0" numbers after speaker labels',
                "Applied bold formatting to speaker names",
                "Fixed obvious analyst firm name misspellings",
                "Standardized speaker label format",
            ]
            changes += [f"Inserted missing speaker label: {l}" for l in result.get("inserted_labels", [])]
            log_change("Clean Transcript", changes)
        except CleanerAPIError as e:
            st.error(f"Error: {e}")
        finally:
            bar.empty()

cleaned = st.session_state.cleaned

# ------------------------------------------------------------
# Follow-up passes
# ------------------------------------------------------------
def run_pass(label, call, result_key, log_title=None):
    try:
        with st.spinner(f"{label}..."):
            js = call(st.session_state.cleaned)
    except CleanerAPIError as e:
        st.error(f"Error: {e}")
        return
    st.session_state.cleaned = js[result_key]
    st.session_state.tokens += js.get("tokens_used", 0)
    if log_title:
        log_change(log_title, js.get("changes_summary") or "Verified speaker attributions and corrected any misplaced labels")
    st.toast(f"✓ {label} done", icon="✅")


if cleaned:
    st.markdown("### Passes")
    b1, b2, b3, b4 = st.columns(4)

    if len(cleaned) > LARGE_TRANSCRIPT_CHARS:
        b1.caption(f"⚠️ {round(len(cleaned) / 1000)}K characters: speaker verification may take 60-120 seconds.")
    if b1.button("🎙️ Verify Speakers"):
        run_pass("Verifying speakers", api.verify_speakers, "verified_transcript", "Verify Speakers")
    if b2.button("📑 Segment"):
        run_pass("Segmenting", api.segment, "segmented_transcript")
    if b3.button("🔤 Check Names"):
        run_pass("Checking names", api.check_names, "corrected_transcript")
    if b4.button("⚖️ Add Disclaimers", disabled=st.session_state.has_disclaimers):
        try:
            js = api.add_disclaimers(st.session_state.cleaned)
            st.session_state.cleaned = js["transcript"]
            st.session_state.has_disclaimers = True
        except CleanerAPIError as e:
            st.error(f"Error: {e}")

# ------------------------------------------------------------
# Output panels
# ------------------------------------------------------------
with col_out:
    st.subheader("Cleaned Transcript")
    if st.session_state.cleaned:
        st.markdown(
            f"<div style='height:500px;overflow-y:auto'>{newlines_to_br(st.session_state.cleaned)}</div>",
            unsafe_allow_html=True,
        )
        st.metric("Tokens used", f"{st.session_state.tokens:,}")
        st.download_button(
            "⬇️ Download",
            data=st.session_state.cleaned,
            file_name=f"cleaned_transcript_{int(datetime.now().timestamp())}.txt",
            mime="text/plain",
        )
        with st.expander("Copy as HTML"):
            st.code(st.session_state.cleaned, language="html")
    else:
        st.info("Cleaned transcript will appear here...")

if st.session_state.change_log:
    st.markdown("### Change Log")
    for entry in st.session_state.change_log:
        st.markdown(f"**{entry['title']}** ({entry['time']})")
        changes = entry["changes"]
        if isinstance(changes, str):
            st.markdown(changes)
        else:
            st.markdown("\n".join(f"- {c}" for c in changes))
