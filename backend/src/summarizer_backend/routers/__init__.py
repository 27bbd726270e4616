# Router modules are exported here for easier access.

from . import health, meetings, sharing, summaries, transcripts

__all__ = ["health", "meetings", "sharing", "summaries", "transcripts"]
