from .config import settings, Settings

__all__ = ["settings", "Settings"]
