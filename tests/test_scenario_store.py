"""
Tests for the in-memory scenario store and default seeding.
"""

import dataclasses

import pytest

from signconnect.vector.embeddings import DeterministicHashEmbedding, Vectorizer
from signconnect.vector.index import SimilarityIndex
from signconnect.vector.store import (
    DEFAULT_SCENARIOS,
    IScenarioStore,
    InMemoryScenarioStore,
    seed_default_scenarios
)
from signconnect.vector.types import ScenarioRecord


def test_store_interface():
    assert isinstance(InMemoryScenarioStore(), IScenarioStore)


def test_records_are_immutable():
    record = ScenarioRecord(id="a", label="A", vector=[1, 0])

    assert record.vector == (1.0, 0.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.label = "B"


def test_list_all_returns_snapshot():
    """Mutating the store must not change an earlier snapshot."""
    store = InMemoryScenarioStore()
    store.create("Coffee Shop", [1.0, 0.0])
    snapshot = store.list_all()

    store.create("Medical", [0.0, 1.0])
    store.clear()

    assert [r.label for r in snapshot] == ["Coffee Shop"]
    assert store.list_all() == []


def test_create_assigns_ids_in_order():
    store = InMemoryScenarioStore()
    first = store.create("A", [1.0])
    second = store.create("B", [1.0])

    assert first.id != second.id
    assert [r.id for r in store.list_all()] == [first.id, second.id]
    assert len(store) == 2


def test_add_replaces_same_id():
    store = InMemoryScenarioStore([ScenarioRecord(id="x", label="Old", vector=[1.0])])
    store.add(ScenarioRecord(id="x", label="New", vector=[1.0]))

    assert [r.label for r in store.list_all()] == ["New"]


def test_remove():
    store = InMemoryScenarioStore()
    record = store.create("A", [1.0])
    store.remove(record.id)
    store.remove("missing")

    assert store.list_all() == []


def test_seed_default_scenarios():
    store = InMemoryScenarioStore()
    vectorizer = Vectorizer(DeterministicHashEmbedding(dimension=64))

    seeded = seed_default_scenarios(store, vectorizer)

    assert [r.label for r in seeded] == [label for label, _ in DEFAULT_SCENARIOS]
    assert store.list_all() == seeded
    assert all(len(r.vector) == 64 for r in seeded)


def test_seed_replaces_existing():
    store = InMemoryScenarioStore()
    store.create("Stale", [1.0])
    vectorizer = Vectorizer(DeterministicHashEmbedding(dimension=8))

    seed_default_scenarios(store, vectorizer, [("Greeting", "Hello! Nice to meet you.")])

    assert [r.label for r in store.list_all()] == ["Greeting"]


def test_seed_skips_unembeddable():
    store = InMemoryScenarioStore()
    vectorizer = Vectorizer(DeterministicHashEmbedding(dimension=8))

    seeded = seed_default_scenarios(store, vectorizer, [("Blank", "   "), ("Greeting", "Hello!")])

    assert [r.label for r in seeded] == ["Greeting"]


def test_seeded_scenario_matches_its_own_text():
    store = InMemoryScenarioStore()
    vectorizer = Vectorizer(DeterministicHashEmbedding())
    seed_default_scenarios(store, vectorizer)

    query = vectorizer.embed_sync("I need help. Please call an ambulance to my location.")
    result = SimilarityIndex().best_match(query, store.list_all())

    assert result.label == "Emergency"
    assert result.score == pytest.approx(1.0)
