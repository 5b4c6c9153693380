"""Campaign repository: create, find, update and delete over a store.

The repository is the only writer to the store. It saves the full list after
every mutation; a failed save is logged and the in-memory list stays
authoritative for the session.
"""

from __future__ import annotations

from mythweaver.core.exceptions import StorageError
from mythweaver.core.logging import get_logger
from mythweaver.models.campaign import Campaign
from mythweaver.storage.store import CampaignStore


logger = get_logger(__name__)


class CampaignRepository:
    """Ordered campaign list backed by a CampaignStore.

    Example:
        >>> from mythweaver.storage.store import InMemoryCampaignStore
        >>> repo = CampaignRepository(InMemoryCampaignStore())
        >>> campaign = repo.create(Campaign(name="A Bleak Road"))
        >>> repo.find(campaign.id) == campaign
        True
    """

    def __init__(self, store: CampaignStore) -> None:
        self.store = store
        self._campaigns: list[Campaign] = store.load()
        logger.info("Campaigns loaded", count=len(self._campaigns))

    def list_campaigns(self) -> list[Campaign]:
        return list(self._campaigns)

    def find(self, campaign_id: str) -> Campaign | None:
        return next((c for c in self._campaigns if c.id == campaign_id), None)

    def create(self, campaign: Campaign) -> Campaign:
        """Append a new campaign. An existing id is updated in place instead."""
        if self.find(campaign.id) is not None:
            return self.update(campaign)
        self._campaigns.append(campaign)
        self._persist()
        logger.info("Campaign created", campaign_id=campaign.id, name=campaign.name)
        return campaign

    def update(self, campaign: Campaign) -> Campaign:
        """Replace the stored campaign with the same id, keeping its position.

        Unknown ids are appended, so a session never loses its campaign.
        """
        for position, existing in enumerate(self._campaigns):
            if existing.id == campaign.id:
                self._campaigns[position] = campaign
                break
        else:
            self._campaigns.append(campaign)
        self._persist()
        return campaign

    def delete(self, campaign_id: str) -> bool:
        """Remove a campaign. Returns False if it did not exist."""
        remaining = [c for c in self._campaigns if c.id != campaign_id]
        if len(remaining) == len(self._campaigns):
            return False
        self._campaigns = remaining
        self._persist()
        logger.info("Campaign deleted", campaign_id=campaign_id)
        return True

    def _persist(self) -> None:
        try:
            self.store.save(self._campaigns)
        except StorageError as exc:
            logger.error("Campaign save failed", error=str(exc))


__all__ = ["CampaignRepository"]
