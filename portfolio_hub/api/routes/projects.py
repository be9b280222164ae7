"""Project listing and management endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from portfolio_hub.api.dependencies import get_db
from portfolio_hub.schemas.projects import (
    ProjectCreateRequest,
    ProjectRead,
    ProjectStatsResponse,
    ProjectUpdateRequest,
)
from portfolio_hub.services import project_service, user_service
from portfolio_hub.services.errors import EmptyUpdateError, ProjectNotFoundError

router = APIRouter(prefix="/api", tags=["projects"])


@router.get("/projects", response_model=list[ProjectRead])
def list_projects(db: Session = Depends(get_db)):
    """All projects, newest first"""
    return project_service.get_all_projects(db)


@router.get("/users/{user_id}/projects", response_model=list[ProjectRead])
def list_user_projects(user_id: str, db: Session = Depends(get_db)):
    return project_service.get_projects_by_author(db, user_id)


@router.post("/users/{user_id}/projects", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(user_id: str, payload: ProjectCreateRequest, db: Session = Depends(get_db)):
    author = user_service.get_user_by_id(db, user_id)
    if author is None:
        raise HTTPException(status_code=404, detail=f"User not found: {user_id}")
    return project_service.create_project(db, payload, author)


@router.get("/users/{user_id}/projects/stats", response_model=ProjectStatsResponse)
def project_stats(user_id: str, db: Session = Depends(get_db)):
    """Project count and technology histogram for one author"""
    return project_service.get_project_stats(db, user_id)


@router.patch("/projects/{project_id}", response_model=ProjectRead)
def update_project(project_id: str, payload: ProjectUpdateRequest, db: Session = Depends(get_db)):
    try:
        return project_service.update_project(db, project_id, payload)
    except EmptyUpdateError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Project not found: {project_id}")


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: str, db: Session = Depends(get_db)):
    try:
        project_service.delete_project(db, project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Project not found: {project_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
