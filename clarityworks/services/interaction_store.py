import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from ..errors import StorageError
from ..models.schemas import Interaction, InteractionFields, InteractionUpdate
from ..utils.ids import new_id, utc_now
from .sample_data import seed_interactions
from .storage import INTERACTIONS_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


class InteractionStore:
    """Append-only log of meetings, calls, emails and notes across all clients."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def list_all(self) -> List[Interaction]:
        try:
            raw = self.storage.read(INTERACTIONS_KEY)
        except StorageError as e:
            logger.warning(f"Could not read interactions, treating as empty: {e}")
            return []
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Interaction data is corrupt, treating as empty: {e}")
            return []
        if not isinstance(records, list):
            logger.warning(f"Interaction data is a {type(records).__name__}, treating as empty")
            return []

        interactions = []
        for index, record in enumerate(records):
            try:
                interactions.append(Interaction.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable interaction at position {index}: {e}")
        return interactions

    def list_for_client(self, client_id: str) -> List[Interaction]:
        """Newest event date first; ties keep their persisted order."""
        interactions = [i for i in self.list_all() if i.client_id == client_id]
        return sorted(interactions, key=lambda i: i.date, reverse=True)

    def get(self, interaction_id: str) -> Optional[Interaction]:
        for interaction in self.list_all():
            if interaction.id == interaction_id:
                return interaction
        return None

    def _save(self, interactions: List[Interaction]):
        payload = [i.model_dump(mode="json", by_alias=True, exclude_none=True) for i in interactions]
        self.storage.write(INTERACTIONS_KEY, json.dumps(payload, indent=2))

    def create(self, fields: InteractionFields) -> Interaction:
        interactions = self.list_all()
        interaction = Interaction.model_validate({
            **fields.model_dump(),
            "id": new_id("interaction"),
            "created_at": utc_now(),
        })
        interactions.append(interaction)
        self._save(interactions)
        logger.info(f"Added {interaction.type} {interaction.id} for client {interaction.client_id}")
        return interaction

    def update(self, interaction_id: str, changes: InteractionUpdate) -> Optional[Interaction]:
        # actionItems is the only field that may be cleared with null
        patch = {
            key: value for key, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or key == "action_items"
        }
        interactions = self.list_all()
        for index, interaction in enumerate(interactions):
            if interaction.id == interaction_id:
                updated = Interaction.model_validate({**interaction.model_dump(), **patch})
                interactions[index] = updated
                self._save(interactions)
                return updated
        return None

    def remove(self, interaction_id: str) -> bool:
        interactions = self.list_all()
        remaining = [i for i in interactions if i.id != interaction_id]
        if len(remaining) == len(interactions):
            return False
        self._save(remaining)
        logger.info(f"Removed interaction {interaction_id}")
        return True

    def remove_for_client(self, client_id: str) -> int:
        interactions = self.list_all()
        remaining = [i for i in interactions if i.client_id != client_id]
        removed = len(interactions) - len(remaining)
        if removed:
            self._save(remaining)
            logger.info(f"Removed {removed} interactions for client {client_id}")
        return removed

    def seed_if_empty(self, client_id: str) -> List[Interaction]:
        """Give a built-in client its sample history the first time it is opened."""
        if self.list_for_client(client_id):
            return []
        seeds = seed_interactions(client_id)
        if seeds:
            logger.info(f"Seeding {len(seeds)} sample interactions for {client_id}")
        return [self.create(fields) for fields in seeds]
