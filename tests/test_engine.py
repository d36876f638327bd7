"""Tests for ConsistencyEngine — full orchestration tests."""

from __future__ import annotations

import dataclasses
from typing import Sequence

from consistency_engine.engine import ConsistencyEngine
from consistency_engine.models.enums import StepPolicy, Tier
from consistency_engine.models.participant import Participant, WorkoutRecord
from consistency_engine.models.snapshot import ParticipantSnapshot


class _History:
    def __init__(self, records: Sequence[WorkoutRecord]) -> None:
        self.records = list(records)
        self.calls: list[tuple[str, int]] = []

    def workouts_for(self, participant_id: str, up_to_week: int) -> list[WorkoutRecord]:
        self.calls.append((participant_id, up_to_week))
        return [r for r in self.records if r.participant_id == participant_id and r.week <= up_to_week]


class _Goals:
    def __init__(self, counts: dict[str, int], broken: frozenset[str] = frozenset()) -> None:
        self.counts = counts
        self.broken = broken

    def completed_goal_count(self, participant_id: str) -> int:
        if participant_id in self.broken:
            raise RuntimeError("goal lookup failed")
        return self.counts.get(participant_id, 0)


class _Sink:
    def __init__(self, broken: frozenset[str] = frozenset()) -> None:
        self.broken = broken
        self.written: list[ParticipantSnapshot] = []

    def write_snapshot(self, snapshot: ParticipantSnapshot) -> None:
        if snapshot.participant_id in self.broken:
            raise ValueError("clean_weeks must be between 0 and 52")
        self.written.append(snapshot)


def _apply(participants: list[Participant], mutations) -> list[Participant]:
    by_id = {m.participant_id: m for m in mutations}
    out = []
    for p in participants:
        m = by_id.get(p.participant_id)
        if m is None:
            out.append(p)
        else:
            out.append(
                dataclasses.replace(
                    p,
                    tier=m.tier,
                    clean_weeks=m.clean_weeks,
                    missed_weeks=m.missed_weeks,
                    total_points=m.total_points,
                    active=m.active,
                )
            )
    return out


class TestEvaluate:
    def test_progressing_participant(self, default_participant: Participant, make_history) -> None:
        snapshot = ConsistencyEngine().evaluate(
            default_participant, make_history("alice", [5, 5, 5]), 4, completed_goals=0
        )
        assert snapshot == ParticipantSnapshot(
            participant_id="alice",
            tier=Tier.FOUR,
            clean_weeks=3,
            missed_weeks=0,
            total_points=3,
            active=True,
        )

    def test_points_include_completed_goals(self, default_participant: Participant, make_history) -> None:
        snapshot = ConsistencyEngine().evaluate(
            default_participant, make_history("alice", [5, 3, 5]), 4, completed_goals=2
        )
        assert snapshot.clean_weeks == 2
        assert snapshot.total_points == 4

    def test_eliminated_participant_inactive_with_counters(
        self, default_participant: Participant, make_history
    ) -> None:
        snapshot = ConsistencyEngine().evaluate(
            default_participant, make_history("alice", [3, 3]), 3, completed_goals=1
        )
        assert snapshot.active is False
        assert snapshot.tier == Tier.FIVE
        assert snapshot.missed_weeks == 2
        assert snapshot.total_points == 1

    def test_not_started(self, bonus_participant: Participant) -> None:
        snapshot = ConsistencyEngine().evaluate(bonus_participant, (), 0, completed_goals=0)
        assert snapshot.tier == Tier.FOUR
        assert snapshot.clean_weeks == 0
        assert snapshot.active is True

    def test_step_policy_is_applied(self, default_participant: Participant) -> None:
        history = [
            WorkoutRecord("alice", 1, day, True, workout_type="steps" if day <= 2 else "run")
            for day in range(1, 6)
        ]
        loose = ConsistencyEngine().evaluate(default_participant, history, 2, 0)
        capped = ConsistencyEngine(StepPolicy.CAPPED).evaluate(default_participant, history, 2, 0)
        assert loose.clean_weeks == 1
        assert capped.clean_weeks == 0


class TestRecalculate:
    def _participants(self) -> list[Participant]:
        return [
            Participant(participant_id="alice", name="Alice"),
            Participant(participant_id="bob", name="Bob", ceiling_tier=Tier.FOUR, tier=Tier.FOUR),
            Participant(participant_id="carol", name="Carol"),
        ]

    def test_emits_mutations_for_changed_snapshots(self, make_history) -> None:
        history = _History(make_history("alice", [5, 5, 5]) + make_history("bob", [4, 4, 4]))
        report = ConsistencyEngine().recalculate(self._participants(), history, _Goals({}), 4)

        assert report.evaluated == 3
        assert sorted(report.changed_ids) == ["alice", "bob", "carol"]
        by_id = {m.participant_id: m for m in report.mutations}
        assert by_id["alice"].tier == Tier.FOUR
        assert by_id["bob"].tier == Tier.THREE
        assert by_id["carol"].missed_weeks == 3
        assert by_id["carol"].active is False

    def test_unchanged_snapshot_emits_nothing(self) -> None:
        participants = [Participant(participant_id="alice", name="Alice")]
        report = ConsistencyEngine().recalculate(participants, _History([]), _Goals({}), 1)
        assert report.mutations == ()

    def test_idempotent_after_applying(self, make_history) -> None:
        engine = ConsistencyEngine()
        history = _History(make_history("alice", [5, 3, 5, 5, 5]) + make_history("bob", [4]))
        goals = _Goals({"alice": 1})
        participants = self._participants()

        first = engine.recalculate(participants, history, goals, 6)
        assert first.mutations
        participants = _apply(participants, first.mutations)

        second = engine.recalculate(participants, history, goals, 6)
        assert second.mutations == ()

    def test_inactive_participants_skipped(self, make_history) -> None:
        participants = [Participant(participant_id="alice", name="Alice", active=False, missed_weeks=2)]
        history = _History(make_history("alice", [5, 5, 5]))
        report = ConsistencyEngine().recalculate(participants, history, _Goals({}), 4)
        assert report.evaluated == 0
        assert report.mutations == ()
        assert history.calls == []

    def test_history_requested_up_to_last_completed_week(self) -> None:
        history = _History([])
        ConsistencyEngine().recalculate(self._participants()[:1], history, _Goals({}), 5)
        assert history.calls == [("alice", 4)]

    def test_failure_isolated_and_reported(self, make_history) -> None:
        history = _History(make_history("alice", [5, 5, 5]) + make_history("carol", [5, 5, 5]))
        goals = _Goals({}, broken=frozenset({"bob"}))
        report = ConsistencyEngine().recalculate(self._participants(), history, goals, 4)

        assert report.has_failures
        assert [f.participant_id for f in report.failures] == ["bob"]
        assert "goal lookup failed" in report.failures[0].error
        assert sorted(report.changed_ids) == ["alice", "carol"]

    def test_apply_writes_every_mutation(self, make_history) -> None:
        engine = ConsistencyEngine()
        history = _History(make_history("alice", [5, 5, 5]))
        report = engine.recalculate(self._participants(), history, _Goals({}), 4)
        sink = _Sink()
        applied = engine.apply(report, sink)
        assert applied.mutations == report.mutations
        assert not applied.has_failures
        assert sink.written == list(report.mutations)

    def test_write_failure_isolated_and_reported(self, make_history) -> None:
        engine = ConsistencyEngine()
        history = _History(make_history("alice", [5, 5, 5]))
        report = engine.recalculate(self._participants(), history, _Goals({}), 4)
        assert report.changed_ids == ["alice", "bob", "carol"]

        sink = _Sink(broken=frozenset({"alice"}))
        applied = engine.apply(report, sink)

        assert [s.participant_id for s in sink.written] == ["bob", "carol"]
        assert applied.changed_ids == ["bob", "carol"]
        assert [f.participant_id for f in applied.failures] == ["alice"]
        assert "clean_weeks" in applied.failures[0].error
        assert applied.evaluated == report.evaluated

    def test_write_failures_follow_evaluation_failures(self, make_history) -> None:
        engine = ConsistencyEngine()
        history = _History(make_history("alice", [5, 5, 5]))
        goals = _Goals({}, broken=frozenset({"bob"}))
        report = engine.recalculate(self._participants(), history, goals, 4)

        applied = engine.apply(report, _Sink(broken=frozenset({"carol"})))
        assert [f.participant_id for f in applied.failures] == ["bob", "carol"]
        assert applied.changed_ids == ["alice"]


class TestScenarios:
    def test_three_clean_weeks(self, default_participant: Participant, make_history) -> None:
        s = ConsistencyEngine().evaluate(default_participant, make_history("alice", [5, 5, 5]), 4, 0)
        assert (s.tier, s.clean_weeks, s.missed_weeks) == (Tier.FOUR, 3, 0)

    def test_double_progression(self, default_participant: Participant, make_history) -> None:
        s = ConsistencyEngine().evaluate(
            default_participant, make_history("alice", [5, 5, 5, 4, 4, 4]), 7, 0
        )
        assert (s.tier, s.clean_weeks, s.missed_weeks) == (Tier.THREE, 6, 0)

    def test_two_misses_eliminate(self, default_participant: Participant, make_history) -> None:
        s = ConsistencyEngine().evaluate(default_participant, make_history("alice", [3, 3]), 3, 0)
        assert s.tier == Tier.FIVE
        assert s.active is False

    def test_fresh_stint_spares_participant(self, default_participant: Participant, make_history) -> None:
        s = ConsistencyEngine().evaluate(
            default_participant, make_history("alice", [3, 5, 5, 5, 3]), 6, 0
        )
        assert s.tier == Tier.FIVE
        assert s.missed_weeks == 2
        assert s.active is True

    def test_bonus_ceiling_progresses(self, bonus_participant: Participant, make_history) -> None:
        s = ConsistencyEngine().evaluate(bonus_participant, make_history("subhash", [4, 4, 4]), 4, 0)
        assert s.tier == Tier.THREE
