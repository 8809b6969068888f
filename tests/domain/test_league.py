import pytest

from league_bot.domain.league import (
    LeagueSnapshot,
    StandingsEntry,
    TransactionRecord,
    snapshot_from_dict,
    snapshot_to_dict,
    standings_entry_from_dict,
)


def _snapshot() -> LeagueSnapshot:
    return LeagueSnapshot(
        players={"Alice": {"HR": 10, "AVG": 0.3}, "Bob Jones": {"IP": 55.1, "ERA": 3.12, "Nickname": "BJ"}},
        teams={"Sharks": {"Wins": 12, "Losses": 4, "AVG": 0.281, "ERA": 3.9}},
        standings=[StandingsEntry("Sharks", 12, 4), StandingsEntry("Jets", 9, 7)],
        transactions=[TransactionRecord("Trade", "Alice", "Sharks"), TransactionRecord("Unknown", None, "Jets")],
    )


class TestSnapshotDict:
    def test_to_dict_uses_wire_field_names(self) -> None:
        raw = snapshot_to_dict(_snapshot())
        assert set(raw) == {"players", "teams", "standings", "transactions"}
        assert raw["standings"][0] == {"team": "Sharks", "wins": 12, "losses": 4}
        assert raw["transactions"][1] == {"type": "Unknown", "player": None, "team": "Jets"}

    def test_from_dict_reverses_to_dict(self) -> None:
        snapshot = _snapshot()
        assert snapshot_from_dict(snapshot_to_dict(snapshot)) == snapshot

    def test_missing_sections_default_to_empty(self) -> None:
        assert snapshot_from_dict({}) == LeagueSnapshot.empty()

    def test_top_level_must_be_object(self) -> None:
        with pytest.raises(TypeError):
            snapshot_from_dict([1, 2, 3])

    def test_players_must_be_object(self) -> None:
        with pytest.raises(TypeError, match="players"):
            snapshot_from_dict({"players": []})

    def test_standings_must_be_list(self) -> None:
        with pytest.raises(TypeError, match="standings"):
            snapshot_from_dict({"standings": {"team": "Sharks"}})

    def test_transaction_without_type_is_written_back_without_one(self) -> None:
        raw = {"transactions": [{"player": "Alice", "team": "Sharks"}]}
        snapshot = snapshot_from_dict(raw)
        assert snapshot.transactions == [TransactionRecord(None, "Alice", "Sharks")]
        assert snapshot_to_dict(snapshot)["transactions"] == raw["transactions"]

    def test_extra_standings_keys_survive(self) -> None:
        raw = {"standings": [{"team": "Sharks", "wins": 12, "losses": 4, "gb": 0, "streak": "W3"}]}
        snapshot = snapshot_from_dict(raw)
        assert snapshot.standings[0].extra == {"gb": 0, "streak": "W3"}
        assert snapshot_to_dict(snapshot)["standings"] == raw["standings"]

    def test_to_dict_does_not_share_nested_values(self) -> None:
        snapshot = LeagueSnapshot(players={"Alice": {"Positions": ["SS", "2B"]}})
        snapshot_to_dict(snapshot)["players"]["Alice"]["Positions"].append("CF")
        assert snapshot.players["Alice"]["Positions"] == ["SS", "2B"]


class TestStandingsEntryFromDict:
    def test_requires_team(self) -> None:
        with pytest.raises(ValueError, match="team"):
            standings_entry_from_dict({"wins": 3, "losses": 1})

    def test_missing_record_defaults_to_zero(self) -> None:
        assert standings_entry_from_dict({"team": "Jets"}) == StandingsEntry("Jets", 0, 0)

    def test_keeps_unknown_keys(self) -> None:
        entry = standings_entry_from_dict({"team": "Sharks", "wins": 12, "losses": 4, "pct": 0.75})
        assert entry == StandingsEntry("Sharks", 12, 4, extra={"pct": 0.75})


class TestSnapshotCopy:
    def test_copy_is_independent(self) -> None:
        snapshot = _snapshot()
        copied = snapshot.copy()

        copied.players["Alice"]["HR"] = 99
        copied.standings.clear()
        copied.transactions.append(TransactionRecord("Release", "Bob Jones", None))

        assert snapshot.players["Alice"]["HR"] == 10
        assert len(snapshot.standings) == 2
        assert len(snapshot.transactions) == 2

    def test_copy_is_deep(self) -> None:
        snapshot = LeagueSnapshot(
            players={"Alice": {"Positions": ["SS"]}},
            standings=[StandingsEntry("Sharks", 1, 0, extra={"last10": [1, 0]})],
        )
        copied = snapshot.copy()

        copied.players["Alice"]["Positions"].append("2B")
        copied.standings[0].extra["last10"].append(1)

        assert snapshot.players["Alice"]["Positions"] == ["SS"]
        assert snapshot.standings[0].extra["last10"] == [1, 0]
