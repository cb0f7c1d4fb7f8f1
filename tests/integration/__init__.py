"""
Integration tests for the PII Redaction Service.

Exercise the FastAPI app end to end with TestClient and in-memory stores
injected through dependency overrides.
"""
