"""
ZK Insurance Services
=====================

Network-facing services built on the shared proof pipeline.

Services:
- verifier: TCP line protocol that proves insurance eligibility with Noir
"""

__all__ = [
    "verifier",
]
