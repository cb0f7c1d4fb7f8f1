"""
Enumerations for PII Redaction Service data models.

EntityType and RedactionType are closed sets. Viewer roles are open-ended
(new roles can be configured in rules without a code change), so ViewerRole
only names the built-in tiers.
"""

from enum import Enum


class EntityType(str, Enum):
    """Kinds of records the service can fetch and redact."""
    
    SERVICE_REQUEST = "service_request"
    PROFILE = "profile"
    MESSAGE = "message"
    EVENT = "event"


class ViewerRole(str, Enum):
    """Built-in viewer trust tiers."""
    
    PARTNER = "partner"
    MEMBER = "member"
    ADMIN = "admin"
    GUEST = "guest"


class RedactionType(str, Enum):
    """Redaction strategies a rule can select."""
    
    MASK = "mask"
    HASH = "hash"
    REMOVE = "remove"
    PSEUDONYMIZE = "pseudonymize"
    REGEX = "regex"


class AuditDispatchMode(str, Enum):
    """
    How audit entries are written relative to the HTTP response.
    
    INLINE waits for the sink before responding. BACKGROUND writes after the
    response has been sent, in the same process. QUEUE hands entries to the
    Celery audit worker through the Redis broker.
    """
    
    INLINE = "inline"
    BACKGROUND = "background"
    QUEUE = "queue"
