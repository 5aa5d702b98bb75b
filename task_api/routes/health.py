from fastapi import APIRouter, Request, Response, status

from task_api.models import HealthSnapshot

router = APIRouter()


@router.get("/", summary="Liveness probe")
async def health_check():
    return Response(status_code=status.HTTP_200_OK)


async def build_health_snapshot(request: Request) -> HealthSnapshot:
    db_status = await request.app.state.repository.ping()
    return HealthSnapshot(
        status="ok" if db_status == "connected" else "degraded",
        service=request.app.state.settings.SERVICE_NAME,
        database=db_status,
    )


@router.get("/health", summary="Service health check", response_model=HealthSnapshot)
async def health_snapshot(request: Request):
    return await build_health_snapshot(request)
