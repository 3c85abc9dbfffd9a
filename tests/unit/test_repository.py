"""Unit tests for InMemoryPaymentRepository."""

import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

from payment_gateway.infrastructure.repository import InMemoryPaymentRepository


def test_add_then_get_returns_equal_summary(repository, sample_summary):
    repository.add(sample_summary)

    stored = repository.get(sample_summary.id)

    assert stored == sample_summary
    assert stored.to_dict() == sample_summary.to_dict()


def test_get_unknown_id_returns_none(repository):
    assert repository.get(uuid.uuid4()) is None


def test_len_counts_stored_summaries(repository, sample_summary):
    assert len(repository) == 0

    repository.add(sample_summary)
    repository.add(replace(sample_summary, id=uuid.uuid4()))

    assert len(repository) == 2


def test_repositories_do_not_share_state(sample_summary):
    first = InMemoryPaymentRepository()
    second = InMemoryPaymentRepository()

    first.add(sample_summary)

    assert second.get(sample_summary.id) is None


def test_concurrent_adds_are_not_lost(repository, sample_summary):
    summaries = [replace(sample_summary, id=uuid.uuid4(), amount=i + 1) for i in range(500)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(repository.add, summaries))

    assert len(repository) == 500
    for summary in summaries:
        assert repository.get(summary.id) == summary


def test_concurrent_reads_see_complete_summaries(repository, sample_summary):
    summaries = [replace(sample_summary, id=uuid.uuid4()) for _ in range(200)]

    def add_and_read(summary):
        repository.add(summary)
        return repository.get(summary.id)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(add_and_read, summaries))

    assert results == summaries
