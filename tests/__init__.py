"""
Test package for rpc-client-tcb.

This package contains:
- test_client.py: Construction and proxy tests
- test_bridge.py: Outcome mapping, failure and concurrency tests
- test_transport.py: AsyncTransport and HttpTransport tests
- test_config.py: Option validation, defaults and environment tests
- test_errors.py: Error taxonomy and envelope model tests
- test_conformance.py: Envelope cases from conformance/*.yaml
- conftest.py: Pytest configuration and fixtures
"""
