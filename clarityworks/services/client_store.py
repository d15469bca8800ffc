import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from ..errors import StorageError
from ..models.schemas import CUSTOM_CLIENT_PREFIX, Client, ClientFields, ClientUpdate, Provenance
from ..utils.ids import new_id
from .sample_data import BUILTIN_CLIENTS, BUILTIN_CLIENT_IDS
from .storage import CLIENTS_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


class ClientStore:
    """
    Built-in sample clients plus the advisor's own ("custom") clients.

    Only the custom list is ever persisted; built-ins live in code and every
    read hands out copies of them.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    @staticmethod
    def is_custom(client_id: str) -> bool:
        return client_id.startswith(CUSTOM_CLIENT_PREFIX)

    def list_all(self) -> List[Client]:
        return [client.model_copy(deep=True) for client in BUILTIN_CLIENTS] + self.list_custom()

    def list_custom(self) -> List[Client]:
        try:
            raw = self.storage.read(CLIENTS_KEY)
        except StorageError as e:
            logger.warning(f"Could not read custom clients, treating as empty: {e}")
            return []
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Custom client data is corrupt, treating as empty: {e}")
            return []
        if not isinstance(records, list):
            logger.warning(f"Custom client data is a {type(records).__name__}, treating as empty")
            return []

        clients = []
        for index, record in enumerate(records):
            try:
                client = Client.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping unreadable custom client at position {index}: {e}")
                continue
            client.provenance = Provenance.CUSTOM
            clients.append(client)
        return clients

    def get(self, client_id: str) -> Optional[Client]:
        for client in self.list_all():
            if client.id == client_id:
                return client
        return None

    def _save_custom(self, clients: List[Client]):
        payload = [client.model_dump(mode="json", by_alias=True) for client in clients]
        self.storage.write(CLIENTS_KEY, json.dumps(payload, indent=2))

    def _allocate_id(self, existing: List[Client]) -> str:
        taken = BUILTIN_CLIENT_IDS.union(client.id for client in existing)
        client_id = new_id("client-custom")
        while client_id in taken:
            client_id = new_id("client-custom")
        return client_id

    def create(self, fields: ClientFields) -> Client:
        custom = self.list_custom()
        client = Client.model_validate({
            **fields.model_dump(),
            "id": self._allocate_id(custom),
            "provenance": Provenance.CUSTOM,
        })
        custom.append(client)
        self._save_custom(custom)
        logger.info(f"Created custom client {client.id} ({client.name})")
        return client

    def update(self, client_id: str, changes: ClientUpdate) -> Optional[Client]:
        if not self.is_custom(client_id):
            logger.warning(f"Refusing to update built-in client {client_id}")
            return None
        custom = self.list_custom()
        for index, client in enumerate(custom):
            if client.id == client_id:
                updated = Client.model_validate({
                    **client.model_dump(),
                    **changes.model_dump(exclude_unset=True, exclude_none=True),
                })
                custom[index] = updated
                self._save_custom(custom)
                logger.info(f"Updated custom client {client_id}")
                return updated
        return None

    def remove(self, client_id: str) -> bool:
        if not self.is_custom(client_id):
            logger.warning(f"Refusing to remove built-in client {client_id}")
            return False
        custom = self.list_custom()
        remaining = [client for client in custom if client.id != client_id]
        if len(remaining) == len(custom):
            return False
        self._save_custom(remaining)
        logger.info(f"Removed custom client {client_id}")
        return True
