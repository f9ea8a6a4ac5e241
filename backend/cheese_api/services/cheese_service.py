"""
Cheese Catalog Backend — Cheese Service (Business Logic)
==========================================================

What:  Create / read / update / delete orchestration for cheese records.
How:   Works against a CheeseStore passed in at construction. Reads are
       "decorated": each record is returned as a CheeseResponse carrying the
       derived imageData data URI.
Who:   Called by the /cheeses request handlers.

Trust boundary:
    Inputs are validated by the request handlers before they get here.
    This service does not re-check names, prices or colors.

Failure model:
    - Expected absence is a return value: None from get/update, False from
      delete, None from get_all_cheeses when the store is empty.
    - Unexpected I/O failures are exceptions (DatabaseError from the store)
      and propagate untouched.
"""

import logging
from typing import List, Optional

from cheese_api.models.cheese import Cheese, CheeseColor
from cheese_api.repositories.cheese_repository import CheeseStore
from cheese_api.schemas.cheese import CheeseRequest, CheeseResponse
from cheese_api.services.image_service import ImageUpload, image_service

logger = logging.getLogger(__name__)


class CheeseService:
    """
    Business logic layer for cheese operations.

    Responsibilities:
        - save_cheese(): attach the image to a new record and persist it
        - get_all_cheeses(): full listing, or None when there is nothing
        - get_one_cheese(): point lookup
        - update_one_cheese(): overwrite fields of an existing record
        - delete_one_cheese(): hard delete
    """

    def __init__(self, store: CheeseStore):
        self.store = store

    def _decorate(self, cheese: Cheese) -> CheeseResponse:
        """Build the response model, deriving imageData from type + blob."""
        return CheeseResponse(
            id=cheese.id,
            name=cheese.name,
            price=cheese.price,
            color=cheese.color,
            image_name=cheese.image_name,
            image_type=cheese.image_type,
            image_data=image_service.to_data_uri(cheese.image_type, cheese.image_blob),
        )

    async def save_cheese(self, record: CheeseRequest, image: ImageUpload) -> CheeseResponse:
        """
        Persist a new cheese together with its image.

        Image fields are set on the in-memory record first, so the row is
        written by a single save call.
        """
        cheese = Cheese(
            name=record.name,
            price=record.price,
            color=CheeseColor.parse(record.color),
            image_name=image.filename,
            image_type=image.content_type,
            image_blob=image.data,
        )
        saved = await self.store.save(cheese)
        logger.info("Cheese %s created: name=%s, image=%d bytes", saved.id, saved.name, image.size)
        return self._decorate(saved)

    async def get_all_cheeses(self) -> Optional[List[CheeseResponse]]:
        """
        Return every cheese, decorated.

        Returns None (the no-content signal) instead of an empty list when the
        store holds no records; callers branch on `is None`.
        """
        cheeses = await self.store.find_all()
        if not cheeses:
            return None
        return [self._decorate(cheese) for cheese in cheeses]

    async def get_one_cheese(self, cheese_id: int) -> Optional[CheeseResponse]:
        cheese = await self.store.find_by_id(cheese_id)
        if cheese is None:
            logger.debug("Cheese %s not found", cheese_id)
            return None
        return self._decorate(cheese)

    async def update_one_cheese(
        self,
        cheese_id: int,
        record: CheeseRequest,
        image: Optional[ImageUpload] = None,
    ) -> Optional[CheeseResponse]:
        """
        Overwrite an existing cheese.

        name, price and color are always replaced. The image columns are only
        replaced when `image` is given; otherwise the stored image is kept.

        Returns:
            The updated record, or None when no cheese has this id. A missing
            id never creates a record.
        """
        cheese = await self.store.find_by_id(cheese_id)
        if cheese is None:
            logger.debug("Update skipped: cheese %s not found", cheese_id)
            return None

        cheese.name = record.name
        cheese.price = record.price
        cheese.color = CheeseColor.parse(record.color)
        if image is not None:
            cheese.image_name = image.filename
            cheese.image_type = image.content_type
            cheese.image_blob = image.data

        saved = await self.store.save(cheese)
        logger.info(
            "Cheese %s updated (image %s)",
            saved.id,
            "replaced" if image is not None else "kept",
        )
        return self._decorate(saved)

    async def delete_one_cheese(self, cheese_id: int) -> bool:
        """Delete by id; False when there was nothing to delete."""
        if not await self.store.exists_by_id(cheese_id):
            logger.debug("Delete skipped: cheese %s not found", cheese_id)
            return False
        await self.store.delete_by_id(cheese_id)
        logger.info("Cheese %s deleted", cheese_id)
        return True
