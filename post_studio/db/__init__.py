"""Database package: session and lifecycle."""
from post_studio.models.db_models import (
    LinkedInDraftRecord,
    SuggestedTopic,
    create_tables,
    dispose_db,
    init_db,
)

__all__ = [
    "LinkedInDraftRecord",
    "SuggestedTopic",
    "create_tables",
    "dispose_db",
    "init_db",
]
