"""Assessment form domain entities.

A form is a tree: categories own questions, questions own answer options, and
an answer option may own a nested list of sub-questions to any depth. Every
parent owns its children outright; no node is shared between forms.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class FormCategory(str, Enum):
    """Fixed taxonomy a form is filed under."""

    ACADEMIC = "Academic"
    BEHAVIORAL = "Behavioral"
    SPEECH = "Speech"
    PHYSICAL = "Physical"
    SOCIAL = "Social"


class FormStatus(str, Enum):
    """Publication status of a form."""

    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class QuestionType(str, Enum):
    """Answer type of a question."""

    MULTIPLE_CHOICE = "multiple_choice"


# Ordered; category statistics are reported in this order.
FORM_CATEGORIES = [c.value for c in FormCategory]
FORM_STATUSES = [s.value for s in FormStatus]
QUESTION_TYPES = [t.value for t in QuestionType]


@dataclass
class AnswerOption:
    """One selectable answer, optionally branching into sub-questions."""

    id: str
    text: str
    has_sub_questions: bool = False
    sub_questions: List["Question"] = field(default_factory=list)


@dataclass
class Question:
    """A prompt with a list of answer options."""

    id: str
    text: str
    type: str = QuestionType.MULTIPLE_CHOICE.value
    options: List[AnswerOption] = field(default_factory=list)


@dataclass
class Category:
    """A named grouping of questions within a form."""

    id: str
    name: str
    description: str = ""
    questions: List[Question] = field(default_factory=list)


@dataclass
class AssessmentForm:
    """Assessment form aggregate root.

    ``category`` and ``status`` hold raw strings so that out-of-range values
    coming from callers reach the validator instead of failing on
    construction. ``id`` stays ``None`` until the repository assigns one.
    """

    title: str
    description: str
    category: str
    categories: List[Category]
    created_by: str
    status: str = FormStatus.DRAFT.value
    usage_count: int = 0
    is_active: bool = True
    id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def touch(self) -> None:
        """Refresh the modification timestamp."""
        self.updated_at = datetime.utcnow()
