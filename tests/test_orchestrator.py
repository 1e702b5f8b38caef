import logging
from datetime import date

from config import Config
from geometry import Rect, Size
from intents import (
    BoundsReported,
    DayTapped,
    DetailsDismissed,
    DetailsRequested,
    DragBegan,
    JumpToToday,
    ModeChanged,
    Navigate,
    OverlayMeasured,
    PageSettled,
    parse_intent_payload,
)
from orchestrator import Orchestrator

TODAY = date(2024, 3, 15)


def _frames(year: int, month: int) -> dict:
    return {
        date(year, month, d): Rect(x=(d % 7) * 50.0, y=(d // 7) * 50.0, width=50.0, height=50.0)
        for d in range(1, 29)
    }


def _keys(orch: Orchestrator):
    return [month.key for month in orch.months]


def test_starts_centered_on_today() -> None:
    orch = Orchestrator(today=TODAY)

    assert _keys(orch) == [(2024, 2), (2024, 3), (2024, 4)]
    assert orch.page_index == 1
    assert orch.title == "March 2024"
    assert orch.selection.selected_dates == (TODAY,)
    assert orch.anchor() is None


def test_config_controls_initial_selection() -> None:
    config = Config(selection_mode="multi", select_today_on_start=False, first_weekday=6)

    orch = Orchestrator.from_config(config, today=TODAY)

    assert orch.selection.mode == "multi"
    assert orch.selection.selected_dates == ()
    assert orch.visible_month.weeks[0][0].weekday() == 6


def test_tap_before_bounds_are_reported_is_ignored() -> None:
    orch = Orchestrator(today=TODAY)

    assert orch.dispatch(DayTapped(date(2024, 3, 10))) is False
    assert orch.selection.selected_dates == (TODAY,)


def test_tap_opens_overlay_anchored_to_the_day() -> None:
    orch = Orchestrator(today=TODAY)
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))

    assert orch.dispatch(DayTapped(date(2024, 3, 10)))

    anchor = orch.anchor()
    assert anchor is not None
    assert anchor.day == date(2024, 3, 10)
    assert anchor.bounds == _frames(2024, 3)[date(2024, 3, 10)]

    first_frame = orch.overlay_placement(350.0)
    assert first_frame is not None and not first_frame.visible

    orch.dispatch(OverlayMeasured(Size(100.0, 60.0)))
    placement = orch.overlay_placement(350.0)
    assert placement is not None and placement.visible


def test_off_center_bounds_reports_are_dropped() -> None:
    orch = Orchestrator(today=TODAY)
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))

    changed = orch.dispatch(BoundsReported(slot=2, frames=_frames(2024, 4)))

    assert changed is False
    assert date(2024, 4, 10) not in orch.state.day_frames


def test_paging_hides_details_and_shifts_the_window() -> None:
    orch = Orchestrator(today=TODAY)
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))
    orch.dispatch(DayTapped(date(2024, 3, 10)))

    orch.dispatch(PageSettled(2))

    assert _keys(orch) == [(2024, 3), (2024, 4), (2024, 5)]
    assert orch.page_index == 1
    assert not orch.selection.is_details_visible
    assert orch.selection.selected_dates == (date(2024, 3, 10),)
    assert orch.state.day_frames == {}
    assert orch.dispatch(DayTapped(date(2024, 4, 10))) is False


def test_cancelled_swipe_changes_nothing() -> None:
    orch = Orchestrator(today=TODAY)
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))
    orch.dispatch(DayTapped(date(2024, 3, 10)))

    assert orch.dispatch(PageSettled(1)) is False
    assert orch.selection.is_details_visible


def test_drag_hides_details_immediately() -> None:
    orch = Orchestrator(today=TODAY)
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))
    orch.dispatch(DayTapped(date(2024, 3, 10)))

    orch.dispatch(DragBegan())

    assert not orch.selection.is_details_visible
    assert _keys(orch) == [(2024, 2), (2024, 3), (2024, 4)]

    orch.dispatch(DetailsRequested())
    assert orch.selection.is_details_visible
    orch.dispatch(DetailsDismissed())
    assert not orch.selection.is_details_visible


def test_navigation_buttons_and_jump_to_today() -> None:
    orch = Orchestrator(today=TODAY)
    orch.dispatch(Navigate("previous"))
    orch.dispatch(Navigate("previous"))
    assert orch.title == "January 2024"

    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 1)))
    orch.dispatch(DayTapped(date(2024, 1, 5)))
    orch.dispatch(JumpToToday())

    assert _keys(orch) == [(2024, 2), (2024, 3), (2024, 4)]
    assert orch.selection.selected_dates == (TODAY,)
    assert not orch.selection.is_details_visible


def test_multi_mode_session_from_payloads() -> None:
    orch = Orchestrator(today=TODAY)
    payloads = [
        {"intent": "mode_changed", "data": {"mode": "multi"}},
        {
            "intent": "bounds_reported",
            "data": {
                "slot": 1,
                "frames": {"2024-03-10": [0, 0, 40, 40], "2024-03-12": [80, 0, 40, 40]},
            },
        },
        {"intent": "day_tapped", "data": {"date": "2024-03-10"}},
        {"intent": "day_tapped", "data": {"date": "2024-03-12"}},
        {"intent": "day_tapped", "data": {"date": "2024-03-10"}},
    ]
    for payload in payloads:
        orch.dispatch(parse_intent_payload(payload))

    assert orch.selection.selected_dates == (TODAY, date(2024, 3, 12))

    orch.dispatch(ModeChanged("single"))
    assert orch.selection.selected_dates == (date(2024, 3, 12),)


def test_details_request_after_paging_waits_for_fresh_bounds() -> None:
    orch = Orchestrator(today=TODAY)
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))
    orch.dispatch(DayTapped(date(2024, 3, 10)))
    orch.dispatch(PageSettled(2))
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 4)))

    orch.dispatch(DetailsRequested())

    assert not orch.selection.is_details_visible
    assert orch.anchor() is None

    orch.dispatch(PageSettled(0))
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))
    orch.dispatch(DetailsRequested())

    anchor = orch.anchor()
    assert anchor is not None
    assert anchor.bounds == _frames(2024, 3)[date(2024, 3, 10)]


def test_multi_details_stay_hidden_after_paging_away() -> None:
    orch = Orchestrator(today=TODAY)
    orch.dispatch(ModeChanged("multi"))
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))
    orch.dispatch(DayTapped(date(2024, 3, 15)))
    orch.dispatch(DayTapped(date(2024, 3, 10)))
    assert orch.selection.selected_dates == (date(2024, 3, 10),)

    orch.dispatch(PageSettled(2))
    orch.dispatch(PageSettled(2))
    orch.dispatch(DetailsRequested())

    assert orch.title == "May 2024"
    assert not orch.selection.is_details_visible
    assert orch.anchor() is None


def test_details_request_after_today_jump_waits_for_fresh_bounds() -> None:
    orch = Orchestrator(Config(selection_mode="multi"), today=TODAY)
    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))
    orch.dispatch(DayTapped(date(2024, 3, 10)))
    orch.dispatch(Navigate("next"))
    orch.dispatch(JumpToToday())

    orch.dispatch(DetailsRequested())

    assert orch.selection.selected_dates == (TODAY, date(2024, 3, 10))
    assert not orch.selection.is_details_visible

    orch.dispatch(BoundsReported(slot=1, frames=_frames(2024, 3)))
    orch.dispatch(DetailsRequested())
    assert orch.selection.is_details_visible


def test_from_config_applies_log_level(monkeypatch) -> None:
    captured = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    Orchestrator.from_config(Config(log_level="DEBUG"), today=TODAY)

    assert captured["level"] == logging.DEBUG
