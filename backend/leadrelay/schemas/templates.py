"""Template Schemas — admin editing of the active lead message template."""

from pydantic import BaseModel, Field


class TemplateUpdate(BaseModel):
    # Not stripped: the template is sent verbatim, line breaks included
    template: str = Field(min_length=1, max_length=4096)


class ActiveTemplate(BaseModel):
    template: str
    customized: bool


class TemplatePreviewRequest(BaseModel):
    whatsapp_number: str = Field("+971501234567", min_length=1, max_length=32)


class TemplatePreview(BaseModel):
    text: str
