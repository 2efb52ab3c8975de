"""TemplateService — reusable job presets: create, list, apply, duplicate, delete."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

from shiftdesk.core.base import BaseService
from shiftdesk.core.config import AppSettings
from shiftdesk.core.exceptions import TemplateNotFoundError
from shiftdesk.core.protocols import ITemplateStore
from shiftdesk.importer.record_mapper import parse_job_type
from shiftdesk.models.job_draft import JobDraft
from shiftdesk.models.template import JobTemplate, TemplateCreate, TemplateUpdate

# draft field -> template value used when the draft leaves the field unset
_TEMPLATE_FALLBACKS: dict[str, Callable[[JobTemplate], Any]] = {
    "title": lambda t: t.name,
    "description": lambda t: t.description,
    "required_skills": lambda t: list(t.default_skills),
    "required_certificates": lambda t: list(t.default_certificates),
    "minimum_experience": lambda t: t.default_experience,
    "hourly_rate": lambda t: t.suggested_rate,
}

# default_settings keys that name draft fields
_SETTINGS_FIELDS: dict[str, str] = {
    "location": "location",
    "postal_code": "postal_code",
    "postalCode": "postal_code",
    "job_type": "job_type",
    "jobType": "job_type",
}


def is_field_set(draft: JobDraft, field: str) -> bool:
    """True when the draft already carries its own value for ``field``."""
    if field == "job_type":
        return field in draft.model_fields_set
    value = getattr(draft, field)
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, dict)):
        return bool(value)
    if isinstance(value, (int, Decimal)):
        return value != 0
    return value is not None


def merge_template(template: JobTemplate, draft: JobDraft) -> JobDraft:
    """Fill the draft's unset fields from the template; set fields win."""
    updates: dict[str, Any] = {}
    for field, source in _TEMPLATE_FALLBACKS.items():
        value = source(template)
        if not is_field_set(draft, field) and value:
            updates[field] = value

    for key, raw in template.default_settings.items():
        field = _SETTINGS_FIELDS.get(key)
        if field is None or field in updates or is_field_set(draft, field):
            continue
        if field == "job_type":
            job_type = parse_job_type(str(raw))
            if job_type is not None:
                updates[field] = job_type
        elif raw:
            updates[field] = str(raw)

    return draft.model_copy(update=updates)


class TemplateService(BaseService):
    """Template operations for one company over a pluggable ITemplateStore."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        store: ITemplateStore,
        company_id: str | None = None,
    ) -> None:
        super().__init__(settings=settings)
        self._store = store
        self._company_id = company_id or settings.imports.company_id

    @property
    def company_id(self) -> str:
        return self._company_id

    def create(self, data: TemplateCreate) -> JobTemplate:
        template = JobTemplate(company_id=self._company_id, **data.model_dump())
        self._store.put(template)
        self._log.info("template_created", template_id=template.template_id, name=template.name)
        return template

    def list(self) -> list[JobTemplate]:
        """Templates of this company, oldest first."""
        templates = self._store.list_for_company(self._company_id)
        return sorted(templates, key=lambda t: (t.created_at, t.template_id))

    def get(self, template_id: str) -> JobTemplate:
        template = self._store.get(self._company_id, template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    def update(self, template_id: str, changes: TemplateUpdate) -> JobTemplate:
        template = self.get(template_id)
        updated = template.model_copy(update=changes.model_dump(exclude_none=True))
        self._store.put(updated)
        self._log.info("template_updated", template_id=template_id)
        return updated

    def apply(self, template_id: str, draft: JobDraft) -> JobDraft:
        """Merge template defaults into ``draft`` and count the use."""
        template = self.get(template_id)
        merged = merge_template(template, draft)
        self._store.put(template.model_copy(update={"usage_count": template.usage_count + 1}))
        self._log.info("template_applied", template_id=template_id, usage_count=template.usage_count + 1)
        return merged

    def new_draft(self, template_id: str, **fields: Any) -> JobDraft:
        """Start a new job draft prefilled from the template."""
        draft = JobDraft(company_id=self._company_id, **fields)
        return self.apply(template_id, draft)

    def duplicate(self, template_id: str) -> JobTemplate:
        source = self.get(template_id)
        copy = JobTemplate(
            company_id=source.company_id,
            name=f"{source.name} (copy)",
            **source.model_dump(
                include={
                    "category",
                    "description",
                    "default_skills",
                    "default_certificates",
                    "default_experience",
                    "suggested_rate",
                    "default_settings",
                }
            ),
        )
        self._store.put(copy)
        self._log.info("template_duplicated", source_id=template_id, template_id=copy.template_id)
        return copy

    def delete(self, template_id: str) -> None:
        if not self._store.delete(self._company_id, template_id):
            raise TemplateNotFoundError(template_id)
        self._log.info("template_deleted", template_id=template_id)
