"""
Dépendances générales de l'API v1.

Ce module contient uniquement les utilitaires partagés par tous les modules :
- PaginationParams : Paramètres de pagination standardisés
- PageMeta / page_meta : Métadonnées de pagination des réponses de liste
"""

from typing import Annotated

from fastapi import Query
from pydantic import BaseModel


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class PaginationParams:
    """
    Paramètres de pagination standardisés pour toutes les routes de liste.

    Usage:
        @router.get("/patients")
        def list_patients(pagination: PaginationParams = Depends()):
            # pagination.page, pagination.size
            ...
    """

    def __init__(
            self,
            page: Annotated[int, Query(description="Numéro de page (commence à 1)")] = 1,
            size: Annotated[int, Query(
                description=f"Nombre d'éléments par page (1 à {MAX_PAGE_SIZE})"
            )] = DEFAULT_PAGE_SIZE,
    ):
        # Valeurs hors bornes ramenées dans l'intervalle autorisé
        self.page = max(1, page)
        self.size = min(MAX_PAGE_SIZE, max(1, size))


class PageMeta(BaseModel):
    """Champs communs aux réponses paginées."""
    total: int
    page: int
    size: int
    pages: int
    has_next: bool
    has_previous: bool


def page_meta(total: int, pagination: PaginationParams) -> dict:
    """Calcule les métadonnées de pagination à partir du total."""
    pages = (total + pagination.size - 1) // pagination.size
    return {
        "total": total,
        "page": pagination.page,
        "size": pagination.size,
        "pages": pages,
        "has_next": pagination.page < pages,
        "has_previous": pagination.page > 1,
    }
