"""User profile, experience/education and domain management endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from portfolio_hub.api.dependencies import get_db, get_domain_service
from portfolio_hub.schemas.users import (
    DomainsResponse,
    DomainsUpdateRequest,
    DomainValidationResponse,
    EducationEntry,
    EducationUpdate,
    ExperienceEntry,
    ExperienceUpdate,
    ProfileStats,
    UserCreateRequest,
    UserProfileResponse,
    UserRead,
    UserUpdateRequest,
)
from portfolio_hub.services import user_service
from portfolio_hub.services.domain_service import DomainService
from portfolio_hub.services.errors import (
    DomainConflictError,
    EmptyUpdateError,
    EntryNotFoundError,
    UserNotFoundError,
)

router = APIRouter(prefix="/api", tags=["users"])


def _user_not_found(user_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"User not found: {user_id}")


@router.post("/users/{user_id}", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(user_id: str, payload: UserCreateRequest, db: Session = Depends(get_db)):
    """Create the user record at the end of onboarding"""
    if user_service.user_exists(db, user_id):
        raise HTTPException(status_code=409, detail=f"User already exists: {user_id}")
    return user_service.create_user(db, user_id, payload)


@router.get("/users/{user_id}", response_model=UserRead)
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = user_service.get_user_by_id(db, user_id)
    if user is None:
        raise _user_not_found(user_id)
    return user


@router.patch("/users/{user_id}", response_model=UserRead)
def update_user(user_id: str, payload: UserUpdateRequest, db: Session = Depends(get_db)):
    try:
        return user_service.update_user(db, user_id, payload)
    except EmptyUpdateError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except UserNotFoundError:
        raise _user_not_found(user_id)


@router.get("/users/{user_id}/profile", response_model=UserProfileResponse)
def get_user_profile(user_id: str, db: Session = Depends(get_db)):
    """User plus project/experience counts and profile completeness"""
    profile = user_service.get_user_profile(db, user_id)
    if profile is None:
        raise _user_not_found(user_id)
    return UserProfileResponse(
        user=UserRead.model_validate(profile["user"]),
        stats=ProfileStats(**profile["stats"]),
    )


def _add_entry(db: Session, user_id: str, kind: str, entry):
    try:
        return user_service.add_entry(db, user_id, kind, entry)
    except UserNotFoundError:
        raise _user_not_found(user_id)


def _update_entry(db: Session, user_id: str, kind: str, entry_id: str, updates):
    try:
        return user_service.update_entry(db, user_id, kind, entry_id, updates)
    except EmptyUpdateError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except UserNotFoundError:
        raise _user_not_found(user_id)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail=f"{kind.capitalize()} entry not found: {entry_id}")


def _delete_entry(db: Session, user_id: str, kind: str, entry_id: str):
    try:
        return user_service.delete_entry(db, user_id, kind, entry_id)
    except UserNotFoundError:
        raise _user_not_found(user_id)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail=f"{kind.capitalize()} entry not found: {entry_id}")


@router.post("/users/{user_id}/experience", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def add_experience(user_id: str, payload: ExperienceEntry, db: Session = Depends(get_db)):
    return _add_entry(db, user_id, user_service.EXPERIENCE, payload)


@router.patch("/users/{user_id}/experience/{entry_id}", response_model=UserRead)
def update_experience(user_id: str, entry_id: str, payload: ExperienceUpdate, db: Session = Depends(get_db)):
    return _update_entry(db, user_id, user_service.EXPERIENCE, entry_id, payload)


@router.delete("/users/{user_id}/experience/{entry_id}", response_model=UserRead)
def delete_experience(user_id: str, entry_id: str, db: Session = Depends(get_db)):
    return _delete_entry(db, user_id, user_service.EXPERIENCE, entry_id)


@router.post("/users/{user_id}/education", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def add_education(user_id: str, payload: EducationEntry, db: Session = Depends(get_db)):
    return _add_entry(db, user_id, user_service.EDUCATION, payload)


@router.patch("/users/{user_id}/education/{entry_id}", response_model=UserRead)
def update_education(user_id: str, entry_id: str, payload: EducationUpdate, db: Session = Depends(get_db)):
    return _update_entry(db, user_id, user_service.EDUCATION, entry_id, payload)


@router.delete("/users/{user_id}/education/{entry_id}", response_model=UserRead)
def delete_education(user_id: str, entry_id: str, db: Session = Depends(get_db)):
    return _delete_entry(db, user_id, user_service.EDUCATION, entry_id)


@router.get("/users/{user_id}/domains", response_model=DomainsResponse)
def get_user_domains(
    user_id: str,
    db: Session = Depends(get_db),
    domains: DomainService = Depends(get_domain_service),
):
    current = domains.get_user_domains(db, user_id)
    if current is None:
        raise _user_not_found(user_id)
    return current


@router.put("/users/{user_id}/domains", response_model=DomainsResponse)
def update_user_domains(
    user_id: str,
    payload: DomainsUpdateRequest,
    db: Session = Depends(get_db),
    domains: DomainService = Depends(get_domain_service),
):
    """Bind a portfolio and/or admin host to the user"""
    try:
        updated = domains.update_user_domains(db, user_id, portfolio=payload.portfolio, admin=payload.admin)
    except UserNotFoundError:
        raise _user_not_found(user_id)
    except DomainConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    if not updated:
        raise HTTPException(status_code=500, detail="Failed to update domains")
    return domains.get_user_domains(db, user_id)


@router.get("/domains/validate", response_model=DomainValidationResponse)
def validate_domain(
    domain: str = Query(..., min_length=1),
    user_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    domains: DomainService = Depends(get_domain_service),
):
    """Whether `domain` is one of the user's own domains"""
    return DomainValidationResponse(
        domain=domain,
        user_id=user_id,
        valid=domains.is_domain_valid(db, domain, user_id),
    )
