"""Merge gate shared by the push listener and the poll loop.

Each field is set once: the first non-empty ``text`` and the first
non-empty ``image_url`` seen for a flow are kept, and anything arriving
later for an already populated field is ignored. A slow duplicate (a poll
landing right after a push, or the other way round) therefore cannot
revert the draft or replay a transition, and every delivery order of the
same payloads ends in the same draft.
"""
from post_studio.models.schemas import DraftPayload
from post_studio.workflow.state import PROGRESS_DONE, PROGRESS_TEXT, Draft, advance_progress


def reconcile(current: Draft, payload: DraftPayload) -> Draft:
    """Return the draft after applying payload.

    Returns ``current`` itself when the payload changes nothing, so callers
    can detect a no-op with ``is``.
    """
    update: dict = {}

    if payload.text and not current.text:
        update["text"] = payload.text
        update["edited_text"] = payload.text
        update["progress"] = advance_progress(current, PROGRESS_TEXT)

    if payload.image_url and not current.image_url:
        update["image_url"] = payload.image_url
        update["progress"] = PROGRESS_DONE
        update["is_loading"] = False

    if not update:
        return current
    return current.model_copy(update=update)


def completes_generation(before: Draft, after: Draft) -> bool:
    """True on the single transition where the image lands."""
    return not before.image_url and bool(after.image_url)
