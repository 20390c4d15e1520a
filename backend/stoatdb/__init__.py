"""
stoatdb - MongoDB bootstrap for the Stoat chat platform.

Creates the ten platform collections, their uniqueness/TTL/text indexes
and the two seed users, in a way that is safe to repeat against a live store.
"""

__version__ = "0.1.0"
