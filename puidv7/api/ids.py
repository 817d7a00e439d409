"""Identifier endpoints for minting and parsing puidv7 IDs."""

from fastapi import APIRouter, Depends, HTTPException

from puidv7.api.deps import get_prefix
from puidv7.core.codec import decode_id, encode_id, new_id, validate_id
from puidv7.core.errors import Puidv7Error
from puidv7.core.models import (
    DecodeResponse,
    EncodeRequest,
    IdentifierRequest,
    IdentifierResponse,
    ValidateResponse,
)

router = APIRouter()


@router.post("/ids/encode", response_model=IdentifierResponse)
async def encode(body: EncodeRequest):
    """Encode an existing UUID with a prefix."""
    try:
        puid = encode_id(body.uuid, body.prefix)
    except Puidv7Error as e:
        raise HTTPException(status_code=400, detail=str(e))
    return IdentifierResponse(id=puid)


@router.post("/ids/decode", response_model=DecodeResponse)
async def decode(body: IdentifierRequest):
    """Decode a puidv7 back to its UUID."""
    try:
        uuid = decode_id(body.id, body.prefix)
    except Puidv7Error as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DecodeResponse(uuid=uuid)


@router.post("/ids/validate", response_model=ValidateResponse)
async def validate(body: IdentifierRequest):
    """Check an ID's shape and prefix without decoding it."""
    try:
        validate_id(body.id, body.prefix)
    except Puidv7Error as e:
        return ValidateResponse(valid=False, detail=str(e))
    return ValidateResponse(valid=True)


@router.post("/ids/{prefix}", response_model=IdentifierResponse, status_code=201)
async def create_id(prefix: str = Depends(get_prefix)):
    """Mint a new time-ordered ID for the given prefix."""
    return IdentifierResponse(id=new_id(prefix))
