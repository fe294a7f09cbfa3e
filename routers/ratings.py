import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from auth.basic import get_current_username
from database import get_store
from functions.user_store import UserRecordStore
from models.rating import is_valid_rating
from models.user_record import UserRecord
from schema.rating import RatingCreate, RatingResponse
from utils.errors import NotFoundError, RatingValidationError

logger = logging.getLogger("myday_api.ratings")

ratings_router = APIRouter(tags=["Ratings"])


async def read_body(request: Request) -> bytes:
    """Hand the raw body to the route so it is decoded after auth and the record lookup"""
    return await request.body()


def require_record(store: UserRecordStore, username: str) -> UserRecord:
    record = store.fetch(username)
    if record is None:
        raise NotFoundError(username)
    return record


@ratings_router.post('/new', status_code=status.HTTP_201_CREATED)
def create_user_data(
    username: str = Depends(get_current_username),
    store: UserRecordStore = Depends(get_store)
):
    # ConflictError and StoreError are turned into responses in main.py
    store.create(username)
    return Response(status_code=status.HTTP_201_CREATED)


@ratings_router.post('/rate', status_code=status.HTTP_202_ACCEPTED)
def rate(
    username: str = Depends(get_current_username),
    store: UserRecordStore = Depends(get_store),
    body: bytes = Depends(read_body)
):
    record = require_record(store, username)

    try:
        data = RatingCreate.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_input=False), body=body)

    rating = data.to_rating()
    if not is_valid_rating(rating):
        raise RatingValidationError(f"Feeling {rating.feeling!r} is not one of Angry, Bored, Great, Good, Normal, Sad")

    store.append(record, rating)
    return Response(status_code=status.HTTP_202_ACCEPTED)


@ratings_router.get('/ratings', response_model=List[RatingResponse])
def get_ratings(
    username: str = Depends(get_current_username),
    store: UserRecordStore = Depends(get_store)
):
    record = require_record(store, username)
    logger.info(f"Returning {len(record.ratings)} ratings for {username}")
    return [RatingResponse.model_validate(rating) for rating in record.ratings]


@ratings_router.get('/tags', response_model=List[str])
def get_tags(
    username: str = Depends(get_current_username),
    store: UserRecordStore = Depends(get_store)
):
    record = require_record(store, username)
    logger.info(f"Returning {len(record.tags)} tags for {username}")
    return record.tags
