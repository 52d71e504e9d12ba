from cat_feed.infra.db.models.base import Base
from cat_feed.infra.db.models.preference import PreferenceRow

__all__ = ["Base", "PreferenceRow"]
