"""
Verifier Service
================

TCP line-protocol front end for insurance eligibility proofs.

Version: 0.1.0
"""
