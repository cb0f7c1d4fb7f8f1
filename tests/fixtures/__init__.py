"""
Test fixtures for the PII Redaction Service.

Contains sample data for testing:
- sample_service_request.json: Service request with an embedded client profile
- sample_rules.json: Rule set covering every redaction strategy
"""
