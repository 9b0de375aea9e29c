"""Tests for SearchStateSink and SearchSnapshot."""

import json
import threading

import pytest
from pydantic import ValidationError

from topoviz._enumerator import SearchEvent, SearchEventKind
from topoviz._sink import SearchSnapshot, SearchStateSink


def entered(*order: str) -> SearchEvent:
    return SearchEvent(
        kind=SearchEventKind.ENTERED,
        partial_order=order,
        highlighted=frozenset(order),
        node=order[-1],
    )


def found(*order: str) -> SearchEvent:
    return SearchEvent(
        kind=SearchEventKind.RESULT_FOUND,
        partial_order=order,
        highlighted=frozenset(order),
        result=order,
    )


class TestSearchSnapshot:
    """Tests for the published snapshot model."""

    def test_defaults(self) -> None:
        snapshot = SearchSnapshot()
        assert snapshot.results == ()
        assert snapshot.partial_order == ()
        assert snapshot.highlighted == frozenset()
        assert snapshot.version == 0
        assert snapshot.last_event is None

    def test_frozen(self) -> None:
        snapshot = SearchSnapshot()
        with pytest.raises(ValidationError):
            snapshot.version = 3

    def test_json_serialization(self) -> None:
        snapshot = SearchSnapshot(results=(("A", "B"),), last_event=SearchEventKind.FINISHED)
        data = json.loads(snapshot.model_dump_json())
        assert data["results"] == [["A", "B"]]
        assert data["last_event"] == "finished"


class TestPublish:
    """Tests for folding events into snapshots."""

    def test_publish_updates_partial_order_and_version(self) -> None:
        sink = SearchStateSink()
        sink.publish(entered("A"))
        snapshot = sink.latest_snapshot()
        assert snapshot.partial_order == ("A",)
        assert snapshot.highlighted == frozenset({"A"})
        assert snapshot.version == 1
        assert snapshot.last_event is SearchEventKind.ENTERED

    def test_results_accumulate_in_order(self) -> None:
        sink = SearchStateSink()
        sink.publish(found("A", "B"))
        sink.publish(entered("B"))
        sink.publish(found("B", "A"))
        assert sink.latest_snapshot().results == (("A", "B"), ("B", "A"))

    def test_old_snapshots_are_unchanged(self) -> None:
        sink = SearchStateSink()
        sink.publish(found("A", "B"))
        first = sink.latest_snapshot()
        sink.publish(found("B", "A"))
        assert first.results == (("A", "B"),)

    def test_settle_keeps_results(self) -> None:
        sink = SearchStateSink()
        sink.publish(found("A", "B"))
        sink.settle()
        snapshot = sink.latest_snapshot()
        assert snapshot.results == (("A", "B"),)
        assert snapshot.partial_order == ()
        assert snapshot.highlighted == frozenset()

    def test_reset_discards_results(self) -> None:
        sink = SearchStateSink()
        sink.publish(found("A", "B"))
        version = sink.latest_snapshot().version
        sink.reset()
        snapshot = sink.latest_snapshot()
        assert snapshot.results == ()
        assert snapshot.version == version + 1


class TestSubscribe:
    """Tests for the FIFO event stream."""

    def test_subscriber_receives_events_in_order(self) -> None:
        sink = SearchStateSink()
        events = sink.subscribe()
        published = [entered("A"), entered("A", "B"), found("A", "B")]
        for event in published:
            sink.publish(event)
        assert [events.get_nowait() for _ in published] == published
        assert events.empty()

    def test_unsubscribe(self) -> None:
        sink = SearchStateSink()
        events = sink.subscribe()
        sink.unsubscribe(events)
        sink.publish(entered("A"))
        assert events.empty()


class TestWaitFor:
    """Tests for blocking until a snapshot matches."""

    def test_returns_immediately_when_satisfied(self) -> None:
        sink = SearchStateSink()
        assert sink.wait_for(lambda s: s.version == 0, timeout=0) == SearchSnapshot()

    def test_times_out(self) -> None:
        sink = SearchStateSink()
        assert sink.wait_for(lambda s: s.version > 0, timeout=0.05) is None

    def test_wakes_on_publish_from_other_thread(self) -> None:
        sink = SearchStateSink()
        thread = threading.Thread(target=sink.publish, args=(found("A"),))
        thread.start()
        snapshot = sink.wait_for(lambda s: len(s.results) == 1, timeout=5)
        thread.join()
        assert snapshot is not None
        assert snapshot.results == (("A",),)
