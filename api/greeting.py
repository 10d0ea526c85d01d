"""Static greeting endpoint."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

GREETING = "Hello From Spring Boot"

router = APIRouter()


@router.get("/hello", response_class=PlainTextResponse)
async def hello() -> str:
    return GREETING
