"""
Custom exceptions for the redaction engine and its collaborators.

Only EntityNotFoundError and the store failures ever reach the HTTP layer.
InvalidRulePatternError and AuditWriteError are raised and absorbed inside
the service so that a safely redacted document is still returned.
"""


class RedactionError(Exception):
    """
    Base exception for all redaction service errors.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EntityNotFoundError(RedactionError):
    """
    Raised when the requested entity does not exist in its repository.
    
    Maps to 404.
    """
    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(
            "Entity not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class RepositoryError(RedactionError):
    """
    Raised when the entity store fails unexpectedly (connection, corrupt payload).
    
    Maps to 500 with a generic message; details stay in server logs.
    """
    pass


class RuleStoreError(RedactionError):
    """
    Raised when the rule store fails unexpectedly.
    
    Maps to 500 with a generic message.
    """
    pass


class InvalidRulePatternError(RedactionError):
    """
    Raised when a rule's regex_pattern does not compile.
    
    Never surfaced: the transformer falls back to mask semantics.
    """
    def __init__(self, pattern: str, reason: str):
        super().__init__(
            f"Invalid regex pattern: {reason}",
            details={"pattern": pattern},
        )
        self.pattern = pattern


class AuditWriteError(RedactionError):
    """
    Raised by audit sinks when entries cannot be persisted.
    
    The audit recorder logs it and drops it; the redaction response is unaffected.
    """
    pass
