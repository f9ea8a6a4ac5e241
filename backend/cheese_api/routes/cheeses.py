"""
Cheese Catalog Backend — Cheese Route Handlers
================================================

What:  CRUD endpoints for cheese records under {api_prefix}/cheeses.
How:   Reads the multipart form, validates fields in a fixed order, delegates
       to CheeseService and maps its outcome to a status code.
Who:   Called by the frontend catalog page and create/edit dialogs.

Multipart layout (POST and PUT):
    cheese     JSON object {"name", "price", "color"}. Browsers send it as a
               Blob part (application/json), other clients as a plain field;
               both are accepted.
    imageFile  The image file. Required on POST, optional on PUT.

Status mapping:
    400  validation failure, text/plain message, nothing is persisted
    201  created / 200 updated or deleted, text/plain message
    204  no such cheese (get, update, delete) or empty catalog (list)
    500  store or image read failure, empty body (see main.py handlers)
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from cheese_api.config import settings
from cheese_api.exceptions import ValidationError
from cheese_api.schemas.cheese import CheeseRequest, CheeseResponse
from cheese_api.services.cheese_service import CheeseService
from cheese_api.services.image_service import ImageUpload, image_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.api_prefix, tags=["Cheeses"])

# ── Response Messages ─────────────────────────────────────────────────────
# Clients match on these exact strings.
MSG_INVALID_REQUEST = "You must provide a valid request"
MSG_NAME_REQUIRED = "Cheese name required"
MSG_INVALID_PRICE = "Cheese price must greater than 0"
MSG_INVALID_COLOR = "Cheese color is invalid"
MSG_IMAGE_REQUIRED = "Cheese image is required"
MSG_CREATED = "Cheese added successfully"
MSG_UPDATED = "Cheese updated successfully"
MSG_DELETED = "Cheese deleted successfully"


# ══════════════════════════════════════════════════════════════════════════
# Dependencies
# ══════════════════════════════════════════════════════════════════════════

def get_cheese_service(request: Request) -> CheeseService:
    """The CheeseService wired in create_app()."""
    return request.app.state.cheese_service


@dataclass
class CheeseForm:
    """The two parts of a cheese multipart request, unvalidated."""

    cheese: Optional[CheeseRequest]
    image_file: Any


async def _parse_cheese_part(part: Any) -> Optional[CheeseRequest]:
    """Decode the `cheese` part; None if absent or not a JSON object."""
    if part is None:
        return None
    if isinstance(part, UploadFile):
        raw = await part.read()
        await part.close()
    else:
        raw = part
    if not raw:
        return None
    try:
        return CheeseRequest.model_validate_json(raw)
    except PydanticValidationError as e:
        logger.debug("Rejected cheese part: %s", e.errors())
        return None


async def cheese_form(request: Request) -> CheeseForm:
    """
    Extract the `cheese` and `imageFile` parts from a multipart body.

    A request without a form content type yields an empty CheeseForm, which
    fails the first validation check.
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        return CheeseForm(cheese=None, image_file=None)
    form = await request.form()
    return CheeseForm(
        cheese=await _parse_cheese_part(form.get("cheese")),
        image_file=form.get("imageFile"),
    )


# ══════════════════════════════════════════════════════════════════════════
# Validation
# ══════════════════════════════════════════════════════════════════════════

def validate_for_create(cheese: Optional[CheeseRequest], image_file: Any) -> CheeseRequest:
    """
    Create checks, in order: record, name, price, color, image.

    Raises:
        ValidationError: with the message of the first failing check.
    """
    if cheese is None:
        raise ValidationError(message=MSG_INVALID_REQUEST, field="cheese")
    if not cheese.name:
        raise ValidationError(message=MSG_NAME_REQUIRED, field="name")
    if cheese.price <= 0:
        raise ValidationError(message=MSG_INVALID_PRICE, field="price")
    if cheese.parsed_color is None:
        raise ValidationError(message=MSG_INVALID_COLOR, field="color")
    if image_service.is_missing(image_file):
        raise ValidationError(message=MSG_IMAGE_REQUIRED, field="imageFile")
    return cheese


def validate_for_update(cheese: Optional[CheeseRequest]) -> CheeseRequest:
    """
    Update checks, in order: record, price, color.

    The name is not checked on update.
    """
    if cheese is None:
        raise ValidationError(message=MSG_INVALID_REQUEST, field="cheese")
    if cheese.price <= 0:
        raise ValidationError(message=MSG_INVALID_PRICE, field="price")
    if cheese.parsed_color is None:
        raise ValidationError(message=MSG_INVALID_COLOR, field="color")
    return cheese


# ══════════════════════════════════════════════════════════════════════════
# Routes
# ══════════════════════════════════════════════════════════════════════════

@router.post(
    "/cheeses",
    status_code=status.HTTP_201_CREATED,
    response_class=PlainTextResponse,
    responses={
        201: {"description": "Cheese created"},
        400: {"description": "Validation failed"},
        500: {"description": "Persistence or image read failure"},
    },
    summary="Create a cheese with its image",
)
async def add_cheese(
    form: CheeseForm = Depends(cheese_form),
    service: CheeseService = Depends(get_cheese_service),
) -> PlainTextResponse:
    cheese = validate_for_create(form.cheese, form.image_file)
    image = await image_service.read_upload(form.image_file)
    if image.size == 0:
        raise ValidationError(message=MSG_IMAGE_REQUIRED, field="imageFile")

    await service.save_cheese(cheese, image)
    return PlainTextResponse(MSG_CREATED, status_code=status.HTTP_201_CREATED)


@router.get(
    "/cheeses",
    response_model=List[CheeseResponse],
    responses={
        200: {"description": "All cheeses, each with imageData"},
        204: {"description": "No cheeses stored"},
    },
    summary="List all cheeses",
)
async def get_cheeses(service: CheeseService = Depends(get_cheese_service)):
    cheeses = await service.get_all_cheeses()
    if cheeses is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return cheeses


@router.get(
    "/cheeses/{cheese_id}",
    response_model=CheeseResponse,
    responses={
        200: {"description": "The cheese"},
        204: {"description": "No cheese with this id"},
    },
    summary="Get one cheese",
)
async def get_one_cheese(
    cheese_id: int,
    service: CheeseService = Depends(get_cheese_service),
):
    cheese = await service.get_one_cheese(cheese_id)
    if cheese is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return cheese


@router.put(
    "/cheeses/{cheese_id}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Cheese updated"},
        204: {"description": "No cheese with this id"},
        400: {"description": "Validation failed"},
        500: {"description": "Persistence or image read failure"},
    },
    summary="Update a cheese, optionally replacing its image",
)
async def update_cheese(
    cheese_id: int,
    form: CheeseForm = Depends(cheese_form),
    service: CheeseService = Depends(get_cheese_service),
) -> Response:
    cheese = validate_for_update(form.cheese)

    image: Optional[ImageUpload] = None
    if not image_service.is_missing(form.image_file):
        image = await image_service.read_upload(form.image_file)
        if image.size == 0:
            image = None

    if await service.update_one_cheese(cheese_id, cheese, image) is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return PlainTextResponse(MSG_UPDATED)


@router.delete(
    "/cheeses/{cheese_id}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Cheese deleted"},
        204: {"description": "No cheese with this id"},
        500: {"description": "Unexpected failure"},
    },
    summary="Delete a cheese",
)
async def delete_cheese(
    cheese_id: int,
    service: CheeseService = Depends(get_cheese_service),
) -> Response:
    if await service.delete_one_cheese(cheese_id):
        return PlainTextResponse(MSG_DELETED)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
