"""In-memory implementation of AssessmentFormRepository.

Used by the test suite and for local development without MongoDB. Forms are
deep-copied on the way in and out so callers never share a tree with the
store.
"""

import asyncio
import copy
from itertools import count
from typing import Any, Dict, List, Optional, Tuple

from assessment_forms.application.ports.repositories.assessment_form_repo import (
    EDITABLE_FIELDS,
    AssessmentFormRepository,
)
from assessment_forms.domain.entities.assessment_form import AssessmentForm
from assessment_forms.domain.value_objects.node_id import FormId


class InMemoryAssessmentFormRepository(AssessmentFormRepository):
    """Dictionary-backed form store, safe for concurrent coroutines."""

    def __init__(self) -> None:
        # form id -> (form, write sequence); the sequence breaks timestamp ties
        self._forms: Dict[str, Tuple[AssessmentForm, int]] = {}
        self._sequence = count(1)
        self._lock = asyncio.Lock()

    async def add(self, form: AssessmentForm) -> AssessmentForm:
        """Insert a new form, assigning its id."""
        async with self._lock:
            stored = copy.deepcopy(form)
            stored.id = FormId.generate().value
            self._forms[stored.id] = (stored, next(self._sequence))
            return copy.deepcopy(stored)

    async def update_active(
        self, form_id: FormId, fields: Dict[str, Any]
    ) -> Optional[AssessmentForm]:
        """Set the given fields on an active form."""
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
        async with self._lock:
            entry = self._forms.get(form_id.value)
            if not entry or not entry[0].is_active:
                return None
            form = entry[0]
            for name, value in fields.items():
                setattr(form, name, copy.deepcopy(value))
            self._forms[form.id] = (form, next(self._sequence))
            return copy.deepcopy(form)

    async def find_active_by_id(self, form_id: FormId) -> Optional[AssessmentForm]:
        """Find an active form by ID."""
        entry = self._forms.get(form_id.value)
        if not entry or not entry[0].is_active:
            return None
        return copy.deepcopy(entry[0])

    async def find_active(
        self, status: Optional[str] = None, category: Optional[str] = None
    ) -> List[AssessmentForm]:
        """Find active forms, most recently updated first."""
        entries = [
            (form, seq)
            for form, seq in self._forms.values()
            if form.is_active
            and (status is None or form.status == status)
            and (category is None or form.category == category)
        ]
        entries.sort(key=lambda entry: (entry[0].updated_at, entry[1]), reverse=True)
        return [copy.deepcopy(form) for form, _ in entries]

    async def increment_usage(self, form_id: FormId) -> Optional[int]:
        """Add one to the usage count under the store lock."""
        async with self._lock:
            entry = self._forms.get(form_id.value)
            if not entry or not entry[0].is_active:
                return None
            form = entry[0]
            current = form.usage_count
            # Yield inside the critical section; the lock keeps this atomic.
            await asyncio.sleep(0)
            form.usage_count = current + 1
            form.touch()
            self._forms[form.id] = (form, next(self._sequence))
            return form.usage_count

    async def count_active_by_category(self) -> Dict[str, int]:
        """Count active forms per category."""
        counts: Dict[str, int] = {}
        for form, _ in self._forms.values():
            if form.is_active:
                counts[form.category] = counts.get(form.category, 0) + 1
        return counts
