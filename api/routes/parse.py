"""Tokenize and parse endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from servo.errors import ServoError
from servo.frontend.lexer import tokenize
from servo.frontend.parser import parse

router = APIRouter()


class SourceRequest(BaseModel):
    """Request body carrying Servo source text."""
    source: str


class TokenModel(BaseModel):
    kind: str
    text: str


class TokenizeResponse(BaseModel):
    """Response body for tokenization."""
    tokens: List[TokenModel]


class ParseResponse(BaseModel):
    """Response body for parsing."""
    program: Dict[str, Any]
    statement_count: int = 0


@router.post("/tokenize", response_model=TokenizeResponse)
async def tokenize_source(request: SourceRequest):
    """Tokenize Servo source."""
    try:
        tokens = tokenize(request.source)
    except ServoError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())

    return TokenizeResponse(tokens=[TokenModel(**token.to_dict()) for token in tokens])


@router.post("/parse", response_model=ParseResponse)
async def parse_source(request: SourceRequest):
    """Parse Servo source into a syntax tree."""
    try:
        program = parse(request.source)
    except ServoError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())

    return ParseResponse(program=program.to_dict(), statement_count=len(program.body))
