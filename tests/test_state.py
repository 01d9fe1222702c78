import re

from post_studio.utils.helpers import new_flow_id, preview
from post_studio.workflow.state import Draft, FlowState, flow_state, tick_progress


def test_flow_state_follows_draft_fields():
    assert flow_state(None) is FlowState.IDLE
    draft = Draft.new("flow-1", "Topic", "Audience")
    assert flow_state(draft) is FlowState.SUBMITTING
    draft = draft.model_copy(update={"is_submitting": False})
    assert flow_state(draft) is FlowState.AWAITING_TEXT
    draft = draft.model_copy(update={"text": "T"})
    assert flow_state(draft) is FlowState.AWAITING_IMAGE
    draft = draft.model_copy(update={"image_url": "http://x/y.png"})
    assert flow_state(draft) is FlowState.READY


def test_image_without_text_is_still_waiting_for_text():
    draft = Draft(flow_id="flow-1", image_url="http://x/y.png")
    assert flow_state(draft) is FlowState.AWAITING_TEXT


def test_timed_out_state():
    draft = Draft(flow_id="flow-1", text="T", timed_out=True)
    assert flow_state(draft) is FlowState.TIMED_OUT


def test_new_draft_starts_loading_at_submission_checkpoint():
    draft = Draft.new("flow-1", "Topic", "Audience")
    assert draft.progress == 10
    assert draft.is_loading and draft.is_submitting
    assert (draft.text, draft.image_url) == ("", "")


def test_display_text_uses_edited_copy_only_while_editing():
    draft = Draft(flow_id="flow-1", text="original", edited_text="changed")
    assert draft.display_text == "original"
    assert draft.model_copy(update={"is_editing": True}).display_text == "changed"


def test_tick_progress_steps_up_to_ceiling():
    draft = Draft(flow_id="flow-1", progress=80, is_loading=True)
    draft = tick_progress(draft)
    assert draft.progress == 85
    draft = tick_progress(tick_progress(draft))
    assert draft.progress == 90


def test_tick_progress_idle_when_not_loading():
    draft = Draft(flow_id="flow-1", progress=40, is_loading=False)
    assert tick_progress(draft) is draft


def test_new_flow_id_format_and_uniqueness():
    ids = {new_flow_id() for _ in range(200)}
    assert len(ids) == 200
    for flow_id in ids:
        assert re.fullmatch(r"flow-\d{13}-[0-9a-z]{7}", flow_id)


def test_preview_truncates():
    assert preview(None) == ""
    assert preview("short") == "short"
    assert preview("x" * 60) == "x" * 50 + "..."
