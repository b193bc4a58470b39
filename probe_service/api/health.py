from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()
toggle_router = APIRouter()


@router.get("/health/liveness")
async def liveness(request: Request):
    # Without the toggle feature nothing can flip the flag: always UP
    if not request.app.state.liveness_toggle_enabled or request.app.state.liveness.is_alive():
        return {"status": "UP"}
    return JSONResponse(status_code=503, content={"status": "DOWN"})


@router.get("/health/readiness")
async def readiness():
    # No downstream dependencies: ready as soon as we serve requests
    return {"status": "READY"}


@toggle_router.post("/health/liveness/toggle")
async def toggle_liveness(request: Request):
    return {"alive": request.app.state.liveness.toggle()}
