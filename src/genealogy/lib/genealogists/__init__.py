"""Genealogist framework: relation types, typed relations and the service registry.

Built-in services are registered on import.  Further services can be added by
calling :func:`register_service` before genealogists are procured.
"""

from .base import (
    Genealogist,
    GenealogistService,
    RelationType,
    TypedRelation,
    get_service,
    list_services,
    procure_genealogists,
    register_service,
)
from .random_baseline import RandomGenealogistService
from .repo_affinity import RepoAffinityGenealogistService
from .tag_overlap import TagOverlapGenealogistService
from .title_letters import TitleLetterGenealogistService
from .type_affinity import TypeAffinityGenealogistService

# Register built-in services
register_service(TagOverlapGenealogistService())
register_service(TypeAffinityGenealogistService())
register_service(RepoAffinityGenealogistService())
register_service(TitleLetterGenealogistService())
register_service(RandomGenealogistService())

# Every built-in except the random baseline, whose output is not reproducible.
DEFAULT_GENEALOGISTS = ("tag", "type", "repo", "silly")

__all__ = [
    "DEFAULT_GENEALOGISTS",
    "Genealogist",
    "GenealogistService",
    "RelationType",
    "TypedRelation",
    "get_service",
    "list_services",
    "procure_genealogists",
    "register_service",
    "RandomGenealogistService",
    "RepoAffinityGenealogistService",
    "TagOverlapGenealogistService",
    "TitleLetterGenealogistService",
    "TypeAffinityGenealogistService",
]
