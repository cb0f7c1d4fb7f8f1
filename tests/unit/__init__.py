"""
Unit tests for the PII Redaction Service.

Test individual components in isolation:
- Path resolver (get/set, arrays, null intermediates)
- Transformers (mask, hash, remove, pseudonymize, regex)
- Rule selection and engine ordering semantics
- Audit recorder (best-effort behaviour)
- Redis stores (mocked clients)
- Celery audit task
"""
