"""
Todo List - in-memory task tracking over Connect RPC.
"""
__version__ = "1.0.0"
