"""Settings synchronization for the conversion queue.

Keeps user-adjustable operational settings durable across restarts and
consistent with the live task pool that enforces the concurrency ceiling.
"""

__version__ = "0.1.0"
