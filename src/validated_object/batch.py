"""Batch import: build many records, skip and log the invalid ones.

INVARIANT: A record that fails validation never stops the batch. Records
that are not mappings or that name undeclared attributes are programmer
errors and propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from validated_object.base import ValidatedObject

logger = logging.getLogger(__name__)


class SkippedRecord(BaseModel):
    """One record rejected during an import."""

    model_config = {"frozen": True}

    index: int
    message: str
    errors: list[dict[str, str]] = Field(default_factory=list)


class ImportReport(BaseModel):
    """Outcome of :func:`import_records`.

    Attributes:
        model: Name of the class records were built as.
        imported: Valid instances, in input order.
        skipped: Rejected records, in input order.
    """

    model_config = {"frozen": True}

    model: str
    imported: list[Any] = Field(default_factory=list)
    skipped: list[SkippedRecord] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.imported) + len(self.skipped)

    @property
    def ok(self) -> bool:
        return not self.skipped


def import_records(
    model_cls: type[ValidatedObject],
    records: Iterable[Mapping[str, Any]],
) -> ImportReport:
    """Build every record as *model_cls*, collecting failures instead of raising."""
    imported: list[Any] = []
    skipped: list[SkippedRecord] = []
    name = model_cls.__name__

    for index, record in enumerate(records):
        result = model_cls.build(record)
        if result.ok:
            imported.append(result.value)
            continue
        assert result.error is not None
        logger.warning("Skipping invalid %s record %d: %s", name, index, result.error.message)
        skipped.append(
            SkippedRecord(
                index=index,
                message=result.error.message,
                errors=result.error.detail.get("errors", []),
            )
        )

    logger.info("Imported %d of %d %s records", len(imported), len(imported) + len(skipped), name)
    return ImportReport(model=name, imported=imported, skipped=skipped)
