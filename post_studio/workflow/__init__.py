"""Draft state and the merge gate both update channels go through."""
from post_studio.workflow.reconciler import completes_generation, reconcile
from post_studio.workflow.state import Draft, FlowState, flow_state

__all__ = ["Draft", "FlowState", "completes_generation", "flow_state", "reconcile"]
