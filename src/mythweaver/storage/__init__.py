"""Storage module for Mythweaver campaign persistence.

Provides:
- CampaignStore implementations (in-memory JSON document, SQLite)
- CampaignRepository for create/find/update/delete
"""

from mythweaver.storage.repository import CampaignRepository
from mythweaver.storage.store import (
    CampaignStore,
    InMemoryCampaignStore,
    SqliteCampaignStore,
    decode_campaigns,
    encode_campaigns,
)

__all__ = [
    "CampaignRepository",
    "CampaignStore",
    "InMemoryCampaignStore",
    "SqliteCampaignStore",
    "decode_campaigns",
    "encode_campaigns",
]
