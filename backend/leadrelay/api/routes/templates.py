"""Template Routes — view, edit, reset and preview the active lead template.

Invariants:
    - PUT takes effect for the next lead; no restart, no cache
    - DELETE restores the configured default and returns it
    - Preview renders the active template without dispatching anything
"""

from fastapi import APIRouter, Depends

from leadrelay.api.deps import get_template_source
from leadrelay.core.templates import render_lead_message
from leadrelay.infrastructure.template_store import StoredTemplateSource
from leadrelay.schemas.templates import (
    ActiveTemplate,
    TemplatePreview,
    TemplatePreviewRequest,
    TemplateUpdate,
)

router = APIRouter(prefix="/api/v1/templates", tags=["templates"])


async def _active(templates: StoredTemplateSource) -> ActiveTemplate:
    return ActiveTemplate(
        template=await templates.get_active(),
        customized=await templates.is_customized(),
    )


@router.get("/active", response_model=ActiveTemplate)
async def get_active_template(
    templates: StoredTemplateSource = Depends(get_template_source),
):
    return await _active(templates)


@router.put("/active", response_model=ActiveTemplate)
async def save_template(
    body: TemplateUpdate,
    templates: StoredTemplateSource = Depends(get_template_source),
):
    await templates.save(body.template)
    return await _active(templates)


@router.delete("/active", response_model=ActiveTemplate)
async def reset_template(
    templates: StoredTemplateSource = Depends(get_template_source),
):
    await templates.reset()
    return await _active(templates)


@router.post("/preview", response_model=TemplatePreview)
async def preview_template(
    body: TemplatePreviewRequest,
    templates: StoredTemplateSource = Depends(get_template_source),
):
    template = await templates.get_active()
    return TemplatePreview(text=render_lead_message(template, body.whatsapp_number))
