"""
Acquisition flow: data entry of new references.

A submission is normalized, validated and, when valid, stored as pending.
"""

import logging
from typing import Any

from clients.mongo.ReferenceStore import ReferenceStore
from models.engines.FormMapper import FormMapper
from models.engines.ReferenceValidator import ReferenceValidator
from models.entities.acquisition.SubmissionResult import SubmissionResult

logger = logging.getLogger(__name__)


class AcquisitionHandler:
    """Handler for reference submissions."""

    def __init__(self, store: ReferenceStore, mapper: FormMapper = None,
                 validator: ReferenceValidator = None):
        self.store = store
        self.mapper = mapper or FormMapper()
        self.validator = validator or ReferenceValidator()

    async def submit(self, raw: Any) -> SubmissionResult:
        """Normalize, validate and insert a submitted reference.

        Validation problems are returned, not raised; store failures
        propagate as ReferenceStoreError.
        """
        logger.info("Processing reference submission")
        reference = self.mapper.normalize(raw)

        validation = self.validator.validate(reference)
        if not validation.is_valid:
            logger.info(f"Validation failed: {len(validation.errors)} errors")
            return SubmissionResult(success=False, reference=reference, errors=validation.errors)

        stored = await self.store.insert(reference)
        logger.info(f"Reference inserted successfully: {stored.id}")
        return SubmissionResult(success=True, reference=stored)
