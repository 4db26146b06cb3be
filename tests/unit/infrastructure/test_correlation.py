"""Unit tests for correlation ID management.

Tests the ContextVar-backed correlation ID, correlation_scope and the
structlog processor.
"""

import asyncio
import re
from collections.abc import Iterator

import pytest

from wombat.infrastructure.observability.correlation import (
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_correlation_id() -> Iterator[None]:
    set_correlation_id("")
    yield
    set_correlation_id("")


class TestGenerateCorrelationId:
    def test_generate_returns_uuid_format(self) -> None:
        uuid_pattern = re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
            re.IGNORECASE,
        )
        assert uuid_pattern.match(generate_correlation_id()) is not None

    def test_generate_returns_unique_ids(self) -> None:
        ids = [generate_correlation_id() for _ in range(100)]
        assert len(set(ids)) == 100


class TestCorrelationIdContext:
    def test_get_returns_empty_string_when_not_set(self) -> None:
        assert get_correlation_id() == ""

    def test_set_and_get(self) -> None:
        set_correlation_id("action-123")
        assert get_correlation_id() == "action-123"

    @pytest.mark.asyncio
    async def test_context_isolation_between_tasks(self) -> None:
        """Each participant's task keeps its own ID across await points."""
        results: dict[str, str] = {}

        async def client_action(name: str, correlation_id: str) -> None:
            set_correlation_id(correlation_id)
            await asyncio.sleep(0.01)
            results[name] = get_correlation_id()

        await asyncio.gather(
            client_action("alice", "id-alice"),
            client_action("bob", "id-bob"),
        )

        assert results == {"alice": "id-alice", "bob": "id-bob"}


class TestCorrelationScope:
    def test_scope_generates_and_resets(self) -> None:
        with correlation_scope() as correlation_id:
            assert correlation_id
            assert get_correlation_id() == correlation_id

        assert get_correlation_id() == ""

    def test_nested_scope_reuses_outer_id(self) -> None:
        with correlation_scope() as outer:
            with correlation_scope() as inner:
                assert inner == outer
            assert get_correlation_id() == outer

    def test_explicit_id_overrides_outer(self) -> None:
        with correlation_scope("outer-id"):
            with correlation_scope("inner-id") as inner:
                assert inner == "inner-id"
            assert get_correlation_id() == "outer-id"

    def test_scope_resets_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with correlation_scope("failing"):
                raise RuntimeError("boom")

        assert get_correlation_id() == ""

    @pytest.mark.asyncio
    async def test_scope_survives_await(self) -> None:
        with correlation_scope("across-await") as correlation_id:
            await asyncio.sleep(0)
            assert get_correlation_id() == correlation_id


class TestCorrelationIdProcessor:
    def test_processor_adds_correlation_id_when_set(self) -> None:
        set_correlation_id("processor-test-id")

        event_dict: dict[str, object] = {"event": "action_applied", "revision": 3}
        result = correlation_id_processor(None, "info", event_dict)

        assert result["correlation_id"] == "processor-test-id"
        assert result["revision"] == 3

    def test_processor_keeps_bound_correlation_id(self) -> None:
        set_correlation_id("context-id")

        event_dict: dict[str, object] = {"event": "x", "correlation_id": "bound-id"}
        result = correlation_id_processor(None, "info", event_dict)

        assert result["correlation_id"] == "bound-id"

    def test_processor_skips_when_no_correlation_id(self) -> None:
        result = correlation_id_processor(None, "info", {"event": "x"})
        assert "correlation_id" not in result
