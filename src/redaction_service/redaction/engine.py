"""
Redaction engine.

Fetches the entity and the viewer's rules concurrently, then evaluates rules
in store order against a private working copy of the document:

    for rule in rules:                # store order, never re-sorted
        for field in rule fields:     # narrowed by the request allow-list
            value = get(working_copy, field)
            if absent: skip
            set(working_copy, field, transform(value))

Later rules see the output of earlier ones, so when two rules hit the same
field the last one wins on the final document while both applications are
recorded in the manifest.
"""

import asyncio
import time
from typing import TYPE_CHECKING, Any, Optional

import structlog

from redaction_service.models.request_models import (
    AppliedRedaction,
    RedactionRequest,
    RedactionResult,
)
from redaction_service.models.rule_models import RedactionRule
from redaction_service.monitoring.metrics import (
    redaction_duration_seconds,
    redactions_applied_total,
)
from redaction_service.redaction.document import (
    ABSENT,
    clone_document,
    get_path,
    set_path,
)
from redaction_service.redaction.exceptions import (
    EntityNotFoundError,
    RedactionError,
    RepositoryError,
    RuleStoreError,
)
from redaction_service.redaction.selection import (
    eligible_fields,
    select_applicable_rules,
)
from redaction_service.redaction.transformers import apply_redaction

if TYPE_CHECKING:
    from redaction_service.persistence.entity_repository import EntityRepository
    from redaction_service.persistence.rule_repository import RuleRepository

logger = structlog.get_logger(__name__)


def apply_rules(
    document: dict[str, Any],
    rules: list[RedactionRule],
    allow_list: Optional[list[str]] = None,
) -> RedactionResult:
    """
    Evaluate rules against a copy of document.
    
    Pure in-memory step: the input document is never mutated.
    
    Args:
        document: Fetched entity document
        rules: Applicable rules in evaluation order
        allow_list: Optional request allow-list of dotted paths
    
    Returns:
        RedactionResult with the working copy and the ordered manifest
    """
    working_copy = clone_document(document)
    applied: list[AppliedRedaction] = []
    
    for rule in rules:
        for field in eligible_fields(rule, allow_list):
            current = get_path(working_copy, field)
            if current is ABSENT or current is None:
                continue
            if isinstance(current, (dict, list)):
                # Only scalar leaves are redacted
                logger.debug(
                    "Skipping non-scalar field",
                    rule_id=rule.id,
                    field=field,
                    node_type=type(current).__name__,
                )
                continue
            
            set_path(working_copy, field, apply_redaction(current, rule))
            applied.append(
                AppliedRedaction(
                    field=field,
                    rule_id=rule.id,
                    rule_name=rule.rule_name,
                    redaction_type=rule.redaction_type,
                )
            )
            redactions_applied_total.labels(redaction_type=rule.redaction_type.value).inc()
    
    return RedactionResult(data=working_copy, redactions_applied=applied)


class RedactionEngine:
    """
    Orchestrates one redaction request against injected collaborators.
    
    The engine keeps no per-request state, so one instance can serve
    concurrent requests.
    """
    
    def __init__(
        self,
        entity_repository: "EntityRepository",
        rule_repository: "RuleRepository",
    ):
        """
        Initialize engine.
        
        Args:
            entity_repository: Source of entity documents
            rule_repository: Source of active redaction rules
        """
        self.entity_repository = entity_repository
        self.rule_repository = rule_repository
    
    async def redact(self, request: RedactionRequest) -> RedactionResult:
        """
        Redact one entity for one viewer.
        
        Raises:
            EntityNotFoundError: Entity does not exist
            RepositoryError: Entity store failed
            RuleStoreError: Rule store failed
        """
        start_time = time.perf_counter()
        entity_type = request.entity_type.value
        
        document, rules = await asyncio.gather(
            self._fetch_entity(request),
            self._fetch_rules(request.viewer_role),
        )
        
        if document is None:
            raise EntityNotFoundError(entity_type, request.entity_id)
        
        applicable = select_applicable_rules(rules, request.viewer_role)
        logger.info(
            "Applicable rules selected",
            entity_type=entity_type,
            entity_id=request.entity_id,
            viewer_role=request.viewer_role,
            fetched_rules=len(rules),
            applicable_rules=len(applicable),
        )
        
        if not applicable:
            result = RedactionResult(data=clone_document(document))
        else:
            result = apply_rules(document, applicable, request.fields)
        
        redaction_duration_seconds.labels(entity_type=entity_type).observe(
            time.perf_counter() - start_time
        )
        logger.info(
            "Redaction complete",
            entity_type=entity_type,
            entity_id=request.entity_id,
            redactions_applied=len(result.redactions_applied),
        )
        return result
    
    async def _fetch_entity(self, request: RedactionRequest) -> Optional[dict[str, Any]]:
        try:
            return await self.entity_repository.fetch(request.entity_type, request.entity_id)
        except RedactionError:
            raise
        except Exception as e:
            raise RepositoryError(
                "Entity fetch failed",
                details={"entity_type": request.entity_type.value, "error": str(e)},
            ) from e
    
    async def _fetch_rules(self, viewer_role: str) -> list[RedactionRule]:
        try:
            return await self.rule_repository.list_active_rules(viewer_role)
        except RedactionError:
            raise
        except Exception as e:
            raise RuleStoreError(
                "Rule fetch failed",
                details={"viewer_role": viewer_role, "error": str(e)},
            ) from e
