"""
Integration Tests Package

Test harness for the engine boundary: raw records in, snapshots out.

TEST AXIOMS:
=============
1. Determinism: same records + same request = identical layout
2. Explicit failure: malformed records surface as typed errors
3. Supersede order: only the newest snapshot is current
"""
