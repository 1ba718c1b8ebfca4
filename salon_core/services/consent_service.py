"""
Consent template lifecycle.

    draft --publish--> published --archive--> archived
      |                    |
    delete            new-version --> (new draft row, version + 1)

Only drafts can be edited or deleted. Published and archived templates
are frozen; a change to a published form is made by forking a new
version. Every other action raises InvalidStateTransitionError (409).

Status changes are compare-and-set UPDATEs ("... WHERE status = <from>"),
so two admins racing on the same template cannot both win.
"""
from datetime import datetime
from typing import Any, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from salon_core.core.exceptions import ConflictError, ConsentTemplateNotFoundError, InvalidStateTransitionError
from salon_core.core.tenant_scope import TenantScope
from salon_core.models.consent import ConsentStatus, ConsentTemplate
from salon_core.models.service import Service
from salon_core.utils.logging import get_logger

logger = get_logger(__name__)

RESOURCE = "consent template"

# action -> (allowed source statuses, resulting status)
TRANSITIONS = {
    "publish": ({ConsentStatus.DRAFT}, ConsentStatus.PUBLISHED),
    "archive": ({ConsentStatus.PUBLISHED}, ConsentStatus.ARCHIVED),
}
EDITABLE = {ConsentStatus.DRAFT}
DELETABLE = {ConsentStatus.DRAFT}
FORKABLE = {ConsentStatus.PUBLISHED}


def get_template(scope: TenantScope, template_id: str) -> ConsentTemplate:
    return scope.get(ConsentTemplate, template_id, ConsentTemplateNotFoundError)


def list_templates(scope: TenantScope, status: Optional[ConsentStatus] = None) -> list[ConsentTemplate]:
    query = scope.query(ConsentTemplate)
    if status:
        query = query.filter(ConsentTemplate.status == ConsentStatus(status).value)
    return query.order_by(ConsentTemplate.name, ConsentTemplate.version.desc()).all()


def _ensure_allowed(template: ConsentTemplate, action: str, allowed: set) -> None:
    if ConsentStatus(template.status) not in allowed:
        raise InvalidStateTransitionError(action, template.status, RESOURCE)


def _normalize_sections(sections: list[Mapping[str, Any]]) -> list[dict]:
    ordered = sorted((dict(s) for s in sections), key=lambda s: s.get("order", 0))
    for position, section in enumerate(ordered):
        section["order"] = position
    return ordered


def _scoped_required_for(scope: TenantScope, required_for: Optional[Mapping[str, Any]]) -> dict:
    """Keep only service ids that belong to this salon."""
    required_for = dict(required_for or {})
    required_for["services"] = scope.owned_ids(Service, required_for.get("services") or [])
    required_for.setdefault("frequency", "first_visit_only")
    return required_for


def _version_taken(scope: TenantScope, name: str) -> ConflictError:
    scope.db.rollback()
    return ConflictError(f"A consent template named '{name}' already exists at this version")


def _next_version(scope: TenantScope, name: str) -> int:
    latest = (
        scope.query(ConsentTemplate)
        .filter(ConsentTemplate.name == name)
        .with_entities(func.max(ConsentTemplate.version))
        .scalar()
    )
    return (latest or 0) + 1


def _compare_and_set(scope: TenantScope, template: ConsentTemplate, action: str,
                     expected: set, values: Mapping[str, Any]) -> ConsentTemplate:
    try:
        modified = scope.update_where(
            ConsentTemplate,
            [template.id],
            values,
            ConsentTemplate.status.in_([s.value for s in expected]),
        )
    except IntegrityError:
        raise _version_taken(scope, values.get("name", template.name))
    if not modified:
        # Lost a race: report the status that won
        scope.db.rollback()
        scope.db.refresh(template)
        raise InvalidStateTransitionError(action, template.status, RESOURCE)
    scope.db.commit()
    scope.db.refresh(template)
    return template


def create_template(scope: TenantScope, data: Mapping[str, Any]) -> ConsentTemplate:
    template = scope.create(ConsentTemplate, {
        "name": data["name"],
        "description": data.get("description") or "",
        "sections": _normalize_sections(data.get("sections") or []),
        "required_for": _scoped_required_for(scope, data.get("required_for")),
        "version": 1,
        "status": ConsentStatus.DRAFT.value,
    })
    try:
        scope.db.commit()
    except IntegrityError:
        raise _version_taken(scope, data["name"])
    scope.db.refresh(template)

    logger.info(f"Consent template created: {template.id}", extra={"tenant_id": scope.tenant_id})
    return template


def update_template(scope: TenantScope, template_id: str, data: Mapping[str, Any]) -> ConsentTemplate:
    """Edit a draft. Status and version are not editable fields."""
    template = get_template(scope, template_id)
    _ensure_allowed(template, "edit", EDITABLE)

    values: dict[str, Any] = {}
    if data.get("name") is not None:
        values["name"] = data["name"]
    if data.get("description") is not None:
        values["description"] = data["description"]
    if data.get("sections") is not None:
        values["sections"] = _normalize_sections(data["sections"])
    if data.get("required_for") is not None:
        values["required_for"] = _scoped_required_for(scope, data["required_for"])
    if not values:
        return template

    return _compare_and_set(scope, template, "edit", EDITABLE, values)


def transition_template(scope: TenantScope, template_id: str, action: str) -> ConsentTemplate:
    allowed, target = TRANSITIONS[action]
    template = get_template(scope, template_id)
    _ensure_allowed(template, action, allowed)

    values: dict[str, Any] = {"status": target.value}
    if target == ConsentStatus.PUBLISHED:
        values["published_at"] = datetime.utcnow()
    elif target == ConsentStatus.ARCHIVED:
        values["archived_at"] = datetime.utcnow()

    template = _compare_and_set(scope, template, action, allowed, values)
    logger.info(
        f"Consent template {template.id} v{template.version} -> {target.value}",
        extra={"tenant_id": scope.tenant_id}
    )
    return template


def publish_template(scope: TenantScope, template_id: str) -> ConsentTemplate:
    return transition_template(scope, template_id, "publish")


def archive_template(scope: TenantScope, template_id: str) -> ConsentTemplate:
    return transition_template(scope, template_id, "archive")


def create_new_version(scope: TenantScope, template_id: str) -> ConsentTemplate:
    """
    Fork a published template into a new draft.

    The source row is left untouched. The new row gets the next version
    number in the template's name lineage and copies of its content.
    """
    source = get_template(scope, template_id)
    _ensure_allowed(source, "create a new version of", FORKABLE)

    draft = scope.create(ConsentTemplate, {
        "name": source.name,
        "description": source.description,
        "sections": [dict(s) for s in source.sections or []],
        "required_for": _scoped_required_for(scope, source.required_for),
        "version": _next_version(scope, source.name),
        "status": ConsentStatus.DRAFT.value,
    })
    try:
        scope.db.commit()
    except IntegrityError:
        # Another fork of the same lineage committed this version first
        raise _version_taken(scope, source.name)
    scope.db.refresh(draft)

    logger.info(
        f"Consent template {source.id} forked to {draft.id} v{draft.version}",
        extra={"tenant_id": scope.tenant_id}
    )
    return draft


def delete_template(scope: TenantScope, template_id: str) -> None:
    template = get_template(scope, template_id)
    _ensure_allowed(template, "delete", DELETABLE)

    deleted = (
        scope.query(ConsentTemplate)
        .filter(
            ConsentTemplate.id == template.id,
            ConsentTemplate.status == ConsentStatus.DRAFT.value,
        )
        .delete(synchronize_session=False)
    )
    if not deleted:
        scope.db.rollback()
        scope.db.refresh(template)
        raise InvalidStateTransitionError("delete", template.status, RESOURCE)
    scope.db.commit()

    logger.info(f"Consent template deleted: {template_id}", extra={"tenant_id": scope.tenant_id})
