"""Tests for the campaign repository."""

from __future__ import annotations

from collections.abc import Sequence

from mythweaver.core.exceptions import StorageError
from mythweaver.models import Campaign
from mythweaver.storage import CampaignRepository, InMemoryCampaignStore
from mythweaver.storage.store import encode_campaigns


class FailingStore:
    """Store whose writes always fail."""

    def __init__(self) -> None:
        self.attempts = 0

    def load(self) -> list[Campaign]:
        return []

    def save(self, campaigns: Sequence[Campaign]) -> None:
        self.attempts += 1
        raise StorageError("Disk full")


class TestCampaignRepository:
    """CRUD over a store, saving after every mutation."""

    def test_loads_existing(self) -> None:
        campaign = Campaign(name="Existing")
        repository = CampaignRepository(InMemoryCampaignStore(encode_campaigns([campaign])))

        assert repository.list_campaigns() == [campaign]

    def test_create_and_find(self, store: InMemoryCampaignStore) -> None:
        repository = CampaignRepository(store)

        campaign = repository.create(Campaign(name="New"))

        assert repository.find(campaign.id) == campaign
        assert store.load() == [campaign]

    def test_find_missing(self, repository: CampaignRepository) -> None:
        assert repository.find("missing") is None

    def test_update_keeps_position(self, repository: CampaignRepository) -> None:
        first = repository.create(Campaign(name="First"))
        repository.create(Campaign(name="Second"))

        repository.update(first.with_log("A new line."))

        names = [c.name for c in repository.list_campaigns()]
        assert names == ["First", "Second"]
        assert repository.list_campaigns()[0].log == ("A new line.",)

    def test_create_existing_id_updates(self, repository: CampaignRepository) -> None:
        campaign = repository.create(Campaign(name="Once"))

        repository.create(campaign.with_log("again"))

        assert len(repository.list_campaigns()) == 1

    def test_delete(self, store: InMemoryCampaignStore) -> None:
        repository = CampaignRepository(store)
        campaign = repository.create(Campaign(name="Doomed"))

        assert repository.delete(campaign.id) is True
        assert repository.delete(campaign.id) is False
        assert store.load() == []

    def test_list_is_a_copy(self, repository: CampaignRepository) -> None:
        repository.list_campaigns().append(Campaign(name="Intruder"))

        assert repository.list_campaigns() == []

    def test_save_failure_is_not_fatal(self) -> None:
        store = FailingStore()
        repository = CampaignRepository(store)

        campaign = repository.create(Campaign(name="Unsaved"))

        assert store.attempts == 1
        assert repository.find(campaign.id) == campaign
