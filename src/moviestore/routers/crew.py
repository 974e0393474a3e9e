"""Cast and crew linking endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session

from moviestore.db import get_session
from moviestore.dependencies import require_admin
from moviestore.queries import delete_credit, find_credit, get_movie, get_person, upsert_credit
from moviestore.schemas.request import CreditIdentity, LinkCreditRequest
from moviestore.schemas.response import CreditResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/admin/movie-crew', tags=['crew'], dependencies=[Depends(require_admin)])


@router.post(
    '',
    response_model=CreditResponse,
    status_code=201,
    responses={200: {'model': CreditResponse, 'description': 'Existing credit updated.'}},
)
def link_person_to_movie(
    body: LinkCreditRequest,
    response: Response,
    session: Session = Depends(get_session),
) -> CreditResponse:
    """Credit a person on a movie, or update the billing order of the same credit."""
    if not get_person(session, body.person_id):
        raise HTTPException(status_code=404, detail='Person not found.')
    if not get_movie(session, body.movie_id):
        raise HTTPException(status_code=404, detail='Movie not found.')

    credit, created = upsert_credit(
        session,
        movie_id=body.movie_id,
        person_id=body.person_id,
        role=body.role,
        job=body.job,
        character=body.character,
        order=body.order,
    )
    if not created:
        response.status_code = 200
    return CreditResponse.from_model(credit)


@router.delete('', status_code=204)
def unlink_person_from_movie(
    body: CreditIdentity,
    session: Session = Depends(get_session),
) -> Response:
    """Remove a credit. Succeeds even when no matching credit exists."""
    credit = find_credit(
        session,
        movie_id=body.movie_id,
        person_id=body.person_id,
        role=body.role,
        job=body.job,
        character=body.character,
    )
    if credit:
        delete_credit(session, credit)
    else:
        logger.info('No credit to unlink for person %s on movie %s', body.person_id, body.movie_id)
    return Response(status_code=204)
