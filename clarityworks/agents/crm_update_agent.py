import asyncio
import logging

from ..models.schemas import AuditLog, CRMUpdateResult
from ..services.sample_data import CANNED_CRM_RESULTS
from ..utils.ids import utc_now

logger = logging.getLogger(__name__)

EMPTY_SUMMARY = "No updates extracted from meeting notes."


class CrmUpdateAgent:
    """
    Stand-in for CRM field extraction: answers with canned suggestions for the
    built-in clients after a short delay, and an empty result for anyone else.
    """

    def __init__(self, delay: float = 1.5):
        self.delay = delay

    async def generate_crm_update(self, client_id: str, meeting_notes: str) -> CRMUpdateResult:
        logger.info(f"Generating CRM update for {client_id} from {len(meeting_notes or '')} chars of notes...")
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        canned = CANNED_CRM_RESULTS.get(client_id)
        if canned is None:
            return CRMUpdateResult(audit_log=AuditLog(summary=EMPTY_SUMMARY, tags=[], timestamp=utc_now()))

        result = canned.model_copy(deep=True)
        result.audit_log.timestamp = utc_now()
        return result
