"""
Test suite for VINTEL

- Unit tests for checksum, normalization, risks, markers and report payloads
- Pipeline tests with mocked collaborators
- HTTP client and LLM adapter tests with mocked transports
- CLI tests via click's CliRunner
"""
