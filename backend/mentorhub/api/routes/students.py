"""Student CRUD routes."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from mentorhub.api.deps import Students, mutation_response
from mentorhub.schemas.students import StudentCreate, StudentsPage, StudentUpdate

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=StudentsPage)
async def list_students(view: Students, action: Literal["add"] | None = None) -> StudentsPage:
    """List students by name. `?action=add` opens the creation form."""
    return await view.load(form_open=action == "add")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_student(data: StudentCreate, view: Students) -> JSONResponse:
    """Add a student."""
    return mutation_response(await view.create(data), status.HTTP_201_CREATED)


@router.patch("/{student_id}")
async def update_student(student_id: UUID, data: StudentUpdate, view: Students) -> JSONResponse:
    return mutation_response(await view.update(student_id, data))


@router.delete("/{student_id}")
async def delete_student(student_id: UUID, view: Students) -> JSONResponse:
    """Delete a student. Their ideas and tasks are kept without a student."""
    return mutation_response(await view.delete(student_id))
