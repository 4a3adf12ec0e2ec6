"""Streamlit UI driven headless through AppTest; no API calls are made."""

import pytest

st_testing = pytest.importorskip("streamlit.testing.v1")


def _button(at, label):
    return next(b for b in at.button if b.label == label)


def test_clear_empties_input_and_results():
    at = st_testing.AppTest.from_file("../demo.py", default_timeout=30).run()
    at.text_area(key="raw_box").input("Krista(Operator)\nGood day.").run()
    at.session_state["cleaned"] = "<strong>Krista</strong> (Operator)"
    at.session_state["tokens"] = 120

    _button(at, "🗑️ Clear").click().run()

    assert not at.exception
    assert at.text_area(key="raw_box").value == ""
    assert at.session_state["cleaned"] == ""
    assert at.session_state["tokens"] == 0
    assert at.session_state["change_log"] == []
