import os
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/")
async def root(request: Request):
    return {"message": request.app.state.settings.GREETING}


@router.get("/env")
async def echo_env(request: Request):
    """Echo the configured environment variable as it is right now ("" if unset)."""
    name = request.app.state.settings.ENV_VAR_NAME
    return {"env": os.environ.get(name, "")}
