"""Router principal do Sigfox — agrega os endpoints do canal."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.sigfox.callback import router as callback_router

router = APIRouter()

router.include_router(callback_router)
