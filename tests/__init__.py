"""
ZK Insurance Verifier Test Suite
================================

Test organization:
- tests/unit/               - Proof pipeline, configuration, logging
- tests/services/verifier/  - Session protocol, reports, TCP server

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=shared             # With coverage

No Noir installation is needed: the toolchain is replaced by a fake
runner or a shell script standing in for nargo.
"""
