from types import SimpleNamespace

from utils_streamlit import request_confirmation, resolve_confirmation, trigger_rerun


def test_confirmed_action_runs_once():
    state: dict = {}
    calls: list[str] = []
    request_confirmation(state, "confirm_reset")

    ran = resolve_confirmation(state, "confirm_reset", confirmed=True, action=lambda: calls.append("reset"))

    assert ran is True
    assert calls == ["reset"]
    assert state["confirm_reset"] is False


def test_cancelled_or_unrequested_action_does_not_run():
    state: dict = {}
    calls: list[str] = []
    assert resolve_confirmation(state, "confirm_reset", confirmed=True, action=lambda: calls.append("x")) is False

    request_confirmation(state, "confirm_reset")
    assert resolve_confirmation(state, "confirm_reset", confirmed=False, action=lambda: calls.append("x")) is False
    assert calls == []


def test_trigger_rerun_prefers_rerun():
    calls: list[str] = []
    trigger_rerun(st_module=SimpleNamespace(rerun=lambda: calls.append("rerun")))
    trigger_rerun(st_module=SimpleNamespace(experimental_rerun=lambda: calls.append("legacy")))
    assert calls == ["rerun", "legacy"]
