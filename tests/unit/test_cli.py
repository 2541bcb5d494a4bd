"""
Tests for CLI helpers that do not need a subprocess.
"""

import pytest

from practice_planner import cli
from practice_planner.clock import FixedClock


@pytest.fixture
def paused_planner(planner, now, monkeypatch):
    monkeypatch.setattr(cli, "clock", FixedClock(now))
    planner.start_practice(now)
    planner.session.pause(now)
    return planner


class TestPauseMenu:
    def test_interrupt_at_prompt_stops_session(self, paused_planner, monkeypatch):
        def interrupted(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli.Prompt, "ask", interrupted)

        assert cli._pause_menu(paused_planner.session) is False
        assert not paused_planner.practicing
        assert len(paused_planner.history) == 0
        assert paused_planner.scheduler.todays_schedule is not None

    def test_resume_choice(self, paused_planner, monkeypatch):
        monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: "r")

        assert cli._pause_menu(paused_planner.session) is True
        assert paused_planner.practicing
        assert not paused_planner.session.is_paused

    def test_skip_then_quit(self, paused_planner, monkeypatch):
        answers = iter(["s", "q"])
        monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: next(answers))

        assert cli._pause_menu(paused_planner.session) is False
        assert not paused_planner.practicing
