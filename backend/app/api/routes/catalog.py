"""Catalog Routes — read-only template catalogue and knowledge-base directory."""

from fastapi import APIRouter, Depends

from app.core.templates import TEMPLATES
from app.core.repository_protocols import KnowledgeBaseDirectory
from app.infrastructure.memory_collaborators import get_knowledge_base_directory
from app.schemas.form import (
    KnowledgeBaseListResponse,
    KnowledgeBaseSchema,
    TemplateSummary,
)

router = APIRouter(prefix="/api/v1", tags=["catalog"])


@router.get("/templates", response_model=list[TemplateSummary])
async def list_templates():
    return [TemplateSummary.from_domain(t) for t in TEMPLATES]


@router.get("/knowledge-bases", response_model=KnowledgeBaseListResponse)
async def list_knowledge_bases(
    directory: KnowledgeBaseDirectory = Depends(get_knowledge_base_directory),
):
    """Knowledge bases selectable for chat forms, in directory order."""
    return KnowledgeBaseListResponse(
        knowledge_bases=[
            KnowledgeBaseSchema.from_domain(kb)
            for kb in directory.list_knowledge_bases()
        ],
        loading=directory.loading,
    )
