"""Students page."""

from uuid import UUID

from mentorhub.cache import keys
from mentorhub.schemas.feedback import MutationResult
from mentorhub.schemas.students import StudentCreate, StudentRead, StudentsPage, StudentUpdate
from mentorhub.store import Order
from mentorhub.views.base import ConsoleView


class StudentsView(ConsoleView):
    async def load(self, *, form_open: bool = False) -> StudentsPage:
        students = await self.read(keys.STUDENTS, self.load_students, empty=[])
        return StudentsPage(students=students, form_open=form_open)

    async def load_students(self) -> list[StudentRead]:
        rows = await self.store.query("students", order=[Order.asc("name")])
        return [StudentRead.model_validate(row) for row in rows]

    async def create(self, form: StudentCreate) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.insert("students", form.model_dump()),
            invalidates=keys.STUDENT_MUTATION_KEYS,
            success="Student added successfully",
            failure="Failed to add student",
            form=form,
        )

    async def update(self, student_id: UUID, patch: StudentUpdate) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.update("students", student_id, patch.model_dump(exclude_unset=True)),
            invalidates=keys.STUDENT_MUTATION_KEYS | keys.STUDENT_EMBED_KEYS,
            invalidates_names=keys.STUDENT_EMBED_NAMES,
            success="Student updated",
            failure="Failed to update student",
            form=patch,
        )

    async def delete(self, student_id: UUID) -> MutationResult:
        # Ideas and tasks keep their rows; their student_id is nulled by the store
        return await self.run_mutation(
            lambda: self.store.delete("students", student_id),
            invalidates=keys.STUDENT_MUTATION_KEYS | keys.STUDENT_EMBED_KEYS,
            invalidates_names=keys.STUDENT_EMBED_NAMES,
            success="Student deleted",
            failure="Failed to delete student",
        )
