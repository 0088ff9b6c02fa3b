"""Background workers for the slot allocation service"""
from .expiry_sweeper import ExpirySweeperWorker

__all__ = ["ExpirySweeperWorker"]
