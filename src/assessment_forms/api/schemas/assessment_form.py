"""
Pydantic schemas for assessment form API endpoints.

Bodies use camelCase keys on the wire. Request schemas only check the shape
of the payload; content rules (non-empty text, option counts, taxonomy
values) are left to the domain validator so that every violation is reported
together.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from assessment_forms.domain.entities.assessment_form import AssessmentForm
from assessment_forms.domain.services.form_tree import compute_field_count


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# Requests


class AnswerOptionSchema(CamelModel):
    """Answer option as submitted by the form builder."""

    id: Optional[str] = Field(None, description="Option ID (generated if omitted)")
    text: Optional[str] = Field(None, description="Option text")
    has_sub_questions: Optional[bool] = Field(
        None, description="Whether the option branches into sub-questions"
    )
    sub_questions: Optional[List["QuestionSchema"]] = Field(
        None, description="Nested sub-questions"
    )


class QuestionSchema(CamelModel):
    """Question as submitted by the form builder."""

    id: Optional[str] = Field(None, description="Question ID (generated if omitted)")
    text: Optional[str] = Field(None, description="Question text")
    type: Optional[str] = Field(None, description="Question type")
    options: Optional[List[AnswerOptionSchema]] = Field(None, description="Answer options")


class CategorySchema(CamelModel):
    """Category as submitted by the form builder."""

    id: Optional[str] = Field(None, description="Category ID (generated if omitted)")
    name: Optional[str] = Field(None, description="Category name")
    description: Optional[str] = Field(None, description="Category description")
    questions: Optional[List[QuestionSchema]] = Field(None, description="Questions")


AnswerOptionSchema.model_rebuild()


class CreateAssessmentFormRequest(CamelModel):
    """Request schema for creating a form."""

    title: Optional[str] = Field(None, description="Form title")
    description: Optional[str] = Field(None, description="Form description")
    category: Optional[str] = Field(None, description="Taxonomy category")
    categories: Optional[List[CategorySchema]] = Field(None, description="Form categories")
    created_by: Optional[str] = Field(None, description="Creator ID")
    status: Optional[str] = Field(None, description="Initial status (default draft)")


class UpdateAssessmentFormRequest(CamelModel):
    """Request schema for a partial form update. Omitted fields are untouched."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    categories: Optional[List[CategorySchema]] = None


class DuplicateAssessmentFormRequest(CamelModel):
    """Request schema for duplicating a form."""

    created_by: Optional[str] = Field(None, description="Owner of the copy")


# Responses


class AnswerOptionResponse(CamelModel):
    id: str
    text: str
    has_sub_questions: bool
    sub_questions: List["QuestionResponse"] = Field(default_factory=list)


class QuestionResponse(CamelModel):
    id: str
    text: str
    type: str
    options: List[AnswerOptionResponse] = Field(default_factory=list)


class CategoryResponse(CamelModel):
    id: str
    name: str
    description: str = ""
    questions: List[QuestionResponse] = Field(default_factory=list)


AnswerOptionResponse.model_rebuild()


class AssessmentFormResponse(CamelModel):
    """Response schema for a form, including its derived field count."""

    id: str = Field(..., description="Form ID")
    title: str
    description: str
    category: str
    status: str
    categories: List[CategoryResponse]
    created_by: str
    usage_count: int
    field_count: int = Field(..., alias="fields", description="Number of fillable prompts")
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, form: AssessmentForm) -> "AssessmentFormResponse":
        return cls(
            id=form.id,
            title=form.title,
            description=form.description,
            category=form.category,
            status=form.status,
            categories=[
                CategoryResponse.model_validate(category, from_attributes=True)
                for category in form.categories
            ],
            created_by=form.created_by,
            usage_count=form.usage_count,
            field_count=compute_field_count(form),
            is_active=form.is_active,
            created_at=form.created_at,
            updated_at=form.updated_at,
        )


class DeleteAssessmentFormResponse(CamelModel):
    """Response schema for a soft delete."""

    message: str


class UsageCountResponse(CamelModel):
    """Response schema for a usage increment."""

    usage_count: int


class CategoryStatSchema(CamelModel):
    """Number of active forms in one taxonomy category."""

    name: str
    count: int


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[dict] = Field(None, description="Additional error details")
