"""
TreeGrid Test Suite.

This package contains:
- unit/: Unit tests (values, model, store, codecs, config)
- integration/: HTTP and gRPC servers on ephemeral ports, cross-protocol parity
"""
