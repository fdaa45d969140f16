"""Execute endpoint for running Servo source."""

from typing import Any, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from servo.runtime.interpreter import Interpreter, InterpreterConfig

router = APIRouter()


class ExecuteRequest(BaseModel):
    """Request body for source execution."""
    source: str
    strict_arity: bool = False


class ExecuteResponse(BaseModel):
    """Response body for source execution."""
    success: bool
    value: Optional[Any] = None
    display: Optional[str] = None
    output: List[str] = []
    error: Optional[str] = None
    error_type: Optional[str] = None
    execution_time_ms: float


@router.post("/execute", response_model=ExecuteResponse)
async def execute_source(request: ExecuteRequest):
    """Execute Servo source in a fresh global scope, capturing print output."""
    output: List[str] = []
    interpreter = Interpreter(
        config=InterpreterConfig(strict_arity=request.strict_arity),
        output=output.append,
    )
    result = interpreter.run(request.source)

    return ExecuteResponse(output=output, **result.to_dict())
