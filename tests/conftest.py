"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import pytest

from league_bot.commands.dispatcher import Caller, CommandDispatcher
from league_bot.ingest.merger import UpdateMerger
from league_bot.state.league_state import LeagueState
from tests.fakes.stores import FakeSnapshotStore
from tests.helpers import ADMIN_ROLES, FIXED_NOW


@pytest.fixture
def store() -> FakeSnapshotStore:
    return FakeSnapshotStore()


@pytest.fixture
def state(store: FakeSnapshotStore) -> LeagueState:
    return LeagueState.open(store)


@pytest.fixture
def merger(state: LeagueState) -> UpdateMerger:
    return UpdateMerger(state)


@pytest.fixture
def dispatcher(state: LeagueState) -> CommandDispatcher:
    return CommandDispatcher(state, ADMIN_ROLES, clock=lambda: FIXED_NOW)


@pytest.fixture
def admin() -> Caller:
    return Caller(display_name="commish", roles=frozenset({"Co-Owner", "Member"}))


@pytest.fixture
def member() -> Caller:
    return Caller(display_name="fan", roles=frozenset({"Member"}))
