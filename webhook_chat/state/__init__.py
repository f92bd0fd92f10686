"""Per-session state driven by the services.

Responsibilities:
    - Conversation: append-only transcript with a waiting flag
    - UploadQueue: pending files and their batch status
    - PreviewStore: image previews owned by upload items
"""

from webhook_chat.state.conversation import Conversation
from webhook_chat.state.previews import PreviewStore, get_preview_store
from webhook_chat.state.upload_queue import UploadQueue

__all__ = ["Conversation", "PreviewStore", "UploadQueue", "get_preview_store"]
