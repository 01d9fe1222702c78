"""API route modules."""
from post_studio.routes.drafts import router as drafts_router
from post_studio.routes.suggestions import router as suggestions_router

__all__ = [
    "drafts_router",
    "suggestions_router",
]
