"""
🧹 Mapeo tolerante de documentos del store a modelos

Un documento mal formado se salta y se reporta; el resto del batch sigue.
"""

import logging
from typing import Any, Callable, Iterable, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SkippedDocuments(BaseModel):
    """Documentos que no se pudieron mapear, con un aviso por cada uno"""

    skipped: list[str] = []
    warnings: list[str] = []

    @property
    def error_count(self) -> int:
        return len(self.skipped)


def _reason(error: Exception) -> str:
    if isinstance(error, KeyError):
        return f"missing field {error}"
    return "; ".join(
        f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
        for detail in error.errors()
    )


def map_documents(
    docs: Iterable[dict[str, Any]],
    from_doc: Callable[[dict[str, Any]], T],
    collection: str,
    report: SkippedDocuments
) -> list[T]:
    """Mapea cada documento con from_doc; los que fallan van a report"""
    items = []
    for doc in docs:
        try:
            items.append(from_doc(doc))
        except (KeyError, ValidationError) as e:
            doc_id = str(doc.get("_id"))
            message = f"Skipped malformed {collection} document {doc_id}: {_reason(e)}"
            logger.warning(f"⚠️ {message}")
            report.skipped.append(doc_id)
            report.warnings.append(message)
    return items
