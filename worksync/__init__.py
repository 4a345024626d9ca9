"""
Work Session offline sync.

Server side: FastAPI application owning the WorkSession state machine and the
progress reconciliation endpoint. Client side (worksync.client): durable local
progress store and the sync driver that drains it when the device is online.
"""

__version__ = "0.1.0"
