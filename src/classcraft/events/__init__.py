from classcraft.events.bus import EventBus
from classcraft.events.types import CacheHit, CacheMiss, CSSGenerated, TokenUnresolved

__all__ = ["EventBus", "CacheHit", "CacheMiss", "CSSGenerated", "TokenUnresolved"]
