"""Folding transient AI output into the interaction log and timeline."""
from typing import List, Optional

from ..models.schemas import CRMUpdateResult, InteractionFields, MeetingPrep, TimelineEntry
from ..utils.ids import today


def _bullets(items: List[str], empty: Optional[str] = None) -> str:
    if not items and empty:
        return f"- {empty}"
    return "\n".join(f"- {item}" for item in items)


def meeting_prep_notes(prep: MeetingPrep) -> str:
    return f"""CLIENT SNAPSHOT:
{prep.client_snapshot}

RECENT CONTEXT:
{prep.recent_context}

TOPICS TO DISCUSS:
{_bullets(prep.key_topics_to_discuss)}

OPEN ACTION ITEMS:
{_bullets(prep.open_action_items, empty="None")}

QUESTIONS TO ASK:
{_bullets(prep.questions_to_ask)}

POTENTIAL CONCERNS:
{prep.potential_concerns}

RELATIONSHIP NOTES:
{prep.relationship_notes}"""


def meeting_prep_interaction_fields(client_id: str, prep: MeetingPrep) -> InteractionFields:
    on = today()
    return InteractionFields(
        client_id=client_id,
        type="note",
        title=f"AI Meeting Prep – {on.strftime('%m/%d/%Y')}",
        date=on,
        notes=meeting_prep_notes(prep),
        action_items=list(prep.open_action_items) or None,
    )


def crm_update_notes(result: CRMUpdateResult) -> str:
    sections = [f"SUMMARY:\n{result.audit_log.summary}"]
    if result.field_updates:
        updates = [
            f"{u.field_name}: {u.current_value} -> {u.proposed_value} ({u.confidence:.0%} confidence)"
            for u in result.field_updates
        ]
        sections.append(f"FIELD UPDATES:\n{_bullets(updates)}")
    if result.audit_log.tags:
        sections.append(f"TAGS: {', '.join(result.audit_log.tags)}")
    return "\n\n".join(sections)


def _task_line(task) -> str:
    due = f" (due {task.due_date})" if task.due_date else ""
    return f"[{task.priority}] {task.owner}: {task.description}{due}"


def crm_update_interaction_fields(client_id: str, result: CRMUpdateResult) -> InteractionFields:
    return InteractionFields(
        client_id=client_id,
        type="note",
        title=f"CRM Update – {today().strftime('%m/%d/%Y')}",
        date=today(),
        notes=crm_update_notes(result),
        action_items=[_task_line(t) for t in result.tasks] or None,
    )


def crm_timeline_entry(result: CRMUpdateResult) -> TimelineEntry:
    count = len(result.field_updates)
    return TimelineEntry(
        date=result.audit_log.timestamp.date().isoformat(),
        title=f"CRM updated ({count} field{'s' if count != 1 else ''})",
        summary=result.audit_log.summary,
        type="crm_update",
    )
