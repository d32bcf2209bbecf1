from fastapi import APIRouter

from speaking_report.api.routes.reports import router as reports_router

api_router = APIRouter()
api_router.include_router(reports_router)


@api_router.get("/healthz")
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
