from __future__ import annotations

from dolmenwood_engine.core.chronicle import ActiveLightSource, Campaign, Delve
from dolmenwood_engine.core.timekeeping import DEFAULT_DATE_TIME, add_turns
from dolmenwood_engine.core.types import GameDateTime

START = GameDateTime(year=1089, month=9, day=27, hour=22, turn=5)


def test_campaign_records_at_current_time(clock):
    campaign = Campaign(id="camp-1", clock=clock)
    assert campaign.current_date_time == DEFAULT_DATE_TIME

    campaign.advance_turn(3)
    entry = campaign.record("Crossed the Hag's Addle")

    assert entry.game_time == add_turns(DEFAULT_DATE_TIME, 3)
    assert entry.real_time == clock.now


def test_campaign_rewind_moves_clock_and_truncates_log(clock):
    campaign = Campaign(id="camp-1", current_date_time=START, clock=clock)
    campaign.record("Camp made")
    campaign.advance_turn(6)
    campaign.record("Wolves howl")
    campaign.record("Earlier rumour", game_time=add_turns(START, -2))

    removed = campaign.rewind_to(add_turns(START, 1))

    assert removed == 1
    assert campaign.current_date_time == add_turns(START, 1)
    assert [e.description for e in campaign.event_log.events] == ["Camp made", "Earlier rumour"]


def test_campaign_round_trip(clock):
    campaign = Campaign(id="camp-1", current_date_time=START, clock=clock)
    campaign.record("Camp made")
    campaign.advance_turn(2)

    restored = Campaign.from_dict(campaign.to_dict(), clock=clock)

    assert restored.to_dict() == campaign.to_dict()
    assert restored.current_date_time == add_turns(START, 2)


def test_delve_end_time_tracks_turns():
    delve = Delve(id="d1", site_name="The Spectral Manse", start_time=START)
    assert delve.title == "The Spectral Manse"
    assert delve.end_time == START

    delve.advance_turn(12)
    assert delve.turns == 13
    assert delve.end_time == add_turns(START, 12)

    delve.advance_turn(-100)
    assert delve.turns == 1
    assert delve.end_time == START


def test_light_sources_burn_down():
    delve = Delve(id="d1", start_time=START)
    torch = delve.add_light_source("torch", "Wren", 6)
    assert torch.iid == 1
    assert torch.lit_at == START

    delve.advance_turn(4)
    assert delve.active_light_sources == [
        ActiveLightSource(iid=1, type="torch", carried_by="Wren", maximum_duration=6, turns_remaining=2)
    ]

    delve.advance_turn(2)
    assert delve.active_light_sources == []

    lantern = delve.add_light_source("lantern", "Ash", 24)
    assert lantern.iid == 2
    assert [light.turns_remaining for light in delve.active_light_sources] == [24]


def test_light_lit_after_current_time_is_not_active():
    delve = Delve(id="d1", start_time=START)
    delve.advance_turn(6)
    delve.add_light_source("lantern", "Ash", 24)

    delve.advance_turn(-6)

    assert delve.active_light_sources == []
    assert len(delve.light_sources) == 1


def test_delve_round_trip_keeps_iids():
    delve = Delve(id="d1", site_name="Barrow", start_time=START)
    delve.add_light_source("torch", "Wren", 6)
    delve.advance_turn(3)

    state = delve.to_dict()
    assert state["iids"] == {"light-source": 2}
    assert isinstance(state["startTime"], int)

    restored = Delve.from_dict(state)
    assert restored.to_dict() == state
    assert restored.add_light_source("candle", "Wren", 1).iid == 2
