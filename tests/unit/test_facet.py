import asyncio
import logging

import pytest
from fakes import ExplodingSink, RecordingProvider, node, pages

from application.expansion import ExpansionEngine
from application.facet import FacetAdapter
from domain.schemas import AnalyticsEvent
from domain.taxonomy.tree import UnknownNodeError
from infrastructure.analytics.sinks import MemoryAnalyticsSink


def _engine() -> tuple[ExpansionEngine, RecordingProvider]:
    provider = RecordingProvider(pages(node("A", node("B"), text="Arts"), node("C", text="Chemistry")))
    return ExpansionEngine(provider), provider


def test_expand_emits_event_then_toggles() -> None:
    engine, _ = _engine()
    sink = MemoryAnalyticsSink()
    facet = FacetAdapter(engine, sink)

    async def scenario() -> None:
        await engine.bootstrap(["|A|B", "|C|D", "|E", "|F"])
        collapsed = await facet.expand("A")
        assert not collapsed.expanded
        reopened = await facet.expand("A")
        assert reopened.expanded

    asyncio.run(scenario())

    assert sink.events == [
        AnalyticsEvent(category="tree", action="contract", label="Discover - Arts"),
        AnalyticsEvent(category="tree", action="expand", label="Discover - Arts"),
    ]


def test_expand_on_collapsed_node_emits_expand_and_fetches() -> None:
    engine, provider = _engine()
    sink = MemoryAnalyticsSink()
    facet = FacetAdapter(engine, sink)

    async def scenario() -> None:
        await engine.bootstrap(["|A|B", "|X"])
        view = await facet.expand("C")
        assert view.expanded
        assert facet.children("C") == []

    asyncio.run(scenario())

    assert [e.action for e in sink.events] == ["expand"]
    assert sink.events[0].label == "Discover - Chemistry"
    assert provider.calls[-1] == "C"


def test_analytics_failure_does_not_affect_tree(caplog: pytest.LogCaptureFixture) -> None:
    engine, _ = _engine()
    sink = ExplodingSink()
    facet = FacetAdapter(engine, sink)

    async def scenario() -> None:
        await engine.bootstrap(["|A|B"])
        with caplog.at_level(logging.WARNING, logger="application.facet"):
            view = await facet.expand("A")
        assert not view.expanded

    asyncio.run(scenario())

    assert sink.calls == 1
    assert "dropping event" in caplog.text


def test_unknown_node_raises_without_emitting() -> None:
    engine, _ = _engine()
    sink = MemoryAnalyticsSink()
    facet = FacetAdapter(engine, sink)

    async def scenario() -> None:
        await engine.bootstrap(["|A|B"])
        with pytest.raises(UnknownNodeError):
            await facet.expand("nope")

    asyncio.run(scenario())
    assert sink.events == []


def test_read_only_views_pass_through() -> None:
    engine, _ = _engine()
    facet = FacetAdapter(engine, MemoryAnalyticsSink())

    asyncio.run(engine.bootstrap(["|A|B"]))

    assert [v.id for v in facet.top_level()] == ["A", "C"]
    assert [v.id for v in facet.children("A")] == ["B"]
    assert facet.node("A").text == "Arts"
