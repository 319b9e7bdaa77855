"""Document store access and audit persistence.

This module talks to the replicated document store through one gateway
contract and records pre-mutation snapshots on local disk.
"""
