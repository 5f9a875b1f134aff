"""
MongoDB Beanie models used by the persistence layer.

The whole category / question / option tree is embedded in the form
document. Sub-questions nest recursively through ``AnswerOptionMongo``.
"""

from datetime import datetime
from typing import List, Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class AnswerOptionMongo(BaseModel):
    """Embedded answer option."""

    id: str = Field(..., description="Option ID")
    text: str = Field(..., description="Option text")
    has_sub_questions: bool = Field(default=False)
    sub_questions: List["QuestionMongo"] = Field(default_factory=list)


class QuestionMongo(BaseModel):
    """Embedded question."""

    id: str = Field(..., description="Question ID")
    text: str = Field(..., description="Question text")
    type: str = Field(default="multiple_choice")
    options: List[AnswerOptionMongo] = Field(default_factory=list)


class CategoryMongo(BaseModel):
    """Embedded form category."""

    id: str = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")
    description: str = Field(default="")
    questions: List[QuestionMongo] = Field(default_factory=list)


AnswerOptionMongo.model_rebuild()


class AssessmentFormMongo(Document):
    """MongoDB model for the AssessmentForm aggregate."""

    form_id: Indexed(str, unique=True) = Field(..., description="Form ID")
    title: str = Field(..., description="Form title")
    description: str = Field(..., description="Form description")
    category: str = Field(..., description="Taxonomy category")
    status: str = Field(default="draft")  # draft, active, archived
    categories: List[CategoryMongo] = Field(default_factory=list)
    created_by: str = Field(..., description="Creator ID")
    usage_count: int = Field(default=0)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "assessmentforms"
        indexes = [
            "category",
            "status",
            "is_active",
            "updated_at",
        ]


def use_collection(name: Optional[str]) -> None:
    """Point the form document at a configured collection name.

    Must be called before Beanie is initialized.
    """
    if name:
        AssessmentFormMongo.Settings.name = name
