# Models package init
# Importing every model here registers all tables on Base.metadata and lets
# relationship() resolve the string class names.
from versenotes.models.user import User
from versenotes.models.post import Post
from versenotes.models.highlight import Highlight

__all__ = ["User", "Post", "Highlight"]
