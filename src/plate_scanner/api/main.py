import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from plate_scanner.api.schemas import ErrorResponse, HealthResponse, ScanStateOut
from plate_scanner.application.plate_scan_service import PlateScanService
from plate_scanner.core.config import settings
from plate_scanner.domain.errors import ScanInProgressError

logger = logging.getLogger(__name__)


def create_app(service: Optional[PlateScanService] = None) -> FastAPI:
    if service is None:
        from plate_scanner.application.camera_service_runner import build_scan_service
        service = build_scan_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # cámara: se pide una vez al arrancar y se libera al apagar
        service.start()
        try:
            yield
        finally:
            service.stop()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.scan_service = service

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        snapshot = service.state.snapshot()
        return HealthResponse(status="ok", env=settings.app_env, camera_ready=snapshot.camera_ready)

    @app.get("/state", response_model=ScanStateOut)
    def get_state():
        return ScanStateOut.from_state(service.state.snapshot())

    # endpoint sync: FastAPI lo corre en el threadpool, el OCR no bloquea el event loop
    @app.post("/capture", response_model=ScanStateOut, responses={409: {"model": ErrorResponse}})
    def capture():
        try:
            snapshot = service.scan()
        except ScanInProgressError:
            logger.warning("Disparo ignorado: ya hay un escaneo en curso")
            raise HTTPException(status_code=409, detail="Scan already in progress")
        return ScanStateOut.from_state(snapshot)

    @app.get(
        "/capture/last",
        response_class=Response,
        responses={200: {"content": {"image/png": {}}}, 404: {"model": ErrorResponse}},
    )
    def last_capture():
        png = service.last_capture()
        if png is None:
            raise HTTPException(status_code=404, detail="No capture yet")
        return Response(content=png, media_type="image/png")

    return app
