# /classboard-backend/classboard/routers/students_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..core.errors import StudentNotFoundError
from ..models import student_model
from ..services.membership_service import MembershipService, get_membership_service

router = APIRouter()

# --- REGISTRATION & AUTHENTICATION ---

@router.post("/register", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Register a Student Account")
def register_student(body: student_model.StudentRegister, members: MembershipService = Depends(get_membership_service)):
    return members.register_student(name=body.display_name, external_id=body.external_id, password=body.password)

@router.post("/join", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Join a Board")
def join_board(body: student_model.StudentJoin, members: MembershipService = Depends(get_membership_service)):
    return members.join_board(
        name=body.display_name,
        external_id=body.external_id,
        board_id=body.board_id,
        password=body.password,
    )

@router.post("/login", response_model=student_model.Student, summary="Log In as a Student")
def login_student(body: student_model.StudentLogin, members: MembershipService = Depends(get_membership_service)):
    return members.login_student(name=body.display_name, external_id=body.external_id, password=body.password)

@router.get("/participations/{external_id}", response_model=List[student_model.StudentParticipation], summary="Boards a Student ID Participates In")
def get_participations(external_id: str, members: MembershipService = Depends(get_membership_service)):
    return members.get_student_participations(external_id)

# --- INDIVIDUAL STUDENT RESOURCE ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.Student, summary="Get a Single Student")
def get_student(student_id: str, members: MembershipService = Depends(get_membership_service)):
    student = members.get_student(student_id)
    if student is None:
        raise StudentNotFoundError()
    return student

@router.put("/{student_id}", response_model=student_model.Student, summary="Update a Student")
def update_student(student_id: str, body: student_model.StudentUpdate, members: MembershipService = Depends(get_membership_service)):
    return members.update_student_info(student_id=student_id, name=body.display_name, external_id=body.external_id)

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student")
def delete_student(student_id: str, members: MembershipService = Depends(get_membership_service)):
    members.delete_student(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.put("/{student_id}/board/{board_id}", response_model=student_model.Student, summary="Move a Student onto a Board")
def add_student_to_board(student_id: str, board_id: str, members: MembershipService = Depends(get_membership_service)):
    return members.add_student_to_board(student_id=student_id, board_id=board_id)

@router.delete("/{student_id}/board/{board_id}", response_model=student_model.Student, summary="Remove a Student from a Board")
def remove_student_from_board(student_id: str, board_id: str, members: MembershipService = Depends(get_membership_service)):
    return members.remove_student_from_board(student_id=student_id, board_id=board_id)
