import asyncio

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response, StreamingResponse

from errors import DeviceAccessError
from models.session import CaptureStatus
from services.session import PantrySession, get_session
from logging_config import logger

router = APIRouter()

PREVIEW_FPS = 15

def _status(session: PantrySession) -> CaptureStatus:
    return CaptureStatus(
        state=session.camera.state.value,
        previewing=session.camera.previewing,
        has_captured_image=session.state.captured_image is not None,
    )

@router.get("", response_model=CaptureStatus, summary="Get the camera state")
async def get_capture(session: PantrySession = Depends(get_session)):
    return _status(session)

@router.post(
    "/start",
    response_model=CaptureStatus,
    summary="Start the camera preview",
    description="""
    Open the camera for the add-item form.

    If the camera is unavailable or access is denied the failure is logged and
    the response reports `previewing: false`.
    """
)
async def start_capture(session: PantrySession = Depends(get_session)):
    logger.info("Starting camera preview")
    await session.start_camera()
    return _status(session)

@router.get(
    "/preview",
    summary="Live camera preview",
    description="Motion JPEG stream of the camera while it is previewing.",
    response_class=StreamingResponse
)
async def preview(session: PantrySession = Depends(get_session)):
    if not session.camera.previewing:
        raise DeviceAccessError("Camera is not previewing")

    async def frames():
        while session.camera.previewing:
            try:
                frame = await asyncio.to_thread(session.camera.preview_frame)
            except DeviceAccessError:
                break
            yield b"--frame\r\nContent-Type: image/jpeg\r\n\r\n" + frame + b"\r\n"
            await asyncio.sleep(1 / PREVIEW_FPS)

    return StreamingResponse(frames(), media_type="multipart/x-mixed-replace; boundary=frame")

@router.post(
    "/snapshot",
    response_model=CaptureStatus,
    summary="Capture a frame",
    description="Capture the current frame for the add-item form and release the camera."
)
async def snapshot(session: PantrySession = Depends(get_session)):
    await session.capture_frame()
    return _status(session)

@router.post(
    "/stop",
    response_model=CaptureStatus,
    summary="Stop the camera",
    description="Release the camera. Does nothing when it is not running."
)
async def stop_capture(session: PantrySession = Depends(get_session)):
    await session.stop_camera()
    return _status(session)

@router.get(
    "/image",
    summary="Get the captured frame",
    response_class=Response
)
async def captured_image(session: PantrySession = Depends(get_session)):
    image = session.state.captured_image
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No image has been captured"
        )
    return Response(content=image, media_type="image/jpeg")
