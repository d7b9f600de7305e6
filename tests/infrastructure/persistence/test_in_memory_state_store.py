"""InMemoryStateStoreのテスト."""

import pytest

from src.infrastructure.exceptions import SerializationError
from src.infrastructure.persistence.in_memory_state_store import InMemoryStateStore


class TestInMemoryStateStore:
    @pytest.mark.asyncio
    async def test_get_missing_key(self):
        assert await InMemoryStateStore().get("missing") is None

    @pytest.mark.asyncio
    async def test_set_get_delete(self):
        store = InMemoryStateStore()

        await store.set("baobab_election_phase", "VOTING")
        assert await store.get("baobab_election_phase") == "VOTING"

        await store.delete("baobab_election_phase")
        assert await store.get("baobab_election_phase") is None

    @pytest.mark.asyncio
    async def test_delete_missing_key_is_noop(self):
        store = InMemoryStateStore()

        await store.delete("missing")

        assert store.keys() == []

    @pytest.mark.asyncio
    async def test_returned_values_are_copies(self):
        """返り値を書き換えても保存内容は変わらないこと."""
        store = InMemoryStateStore({"voters": ["s1"]})

        voters = await store.get("voters")
        voters.append("s2")

        assert await store.get("voters") == ["s1"]

    def test_non_json_value_is_rejected(self):
        with pytest.raises(SerializationError) as exc_info:
            InMemoryStateStore({"bad": object()})

        assert exc_info.value.details["key"] == "bad"

    @pytest.mark.asyncio
    async def test_close_is_noop(self):
        await InMemoryStateStore().close()
