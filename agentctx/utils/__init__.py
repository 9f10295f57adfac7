from .config import load_compaction_config
from .serializer import content_to_text

__all__ = ["content_to_text", "load_compaction_config"]
