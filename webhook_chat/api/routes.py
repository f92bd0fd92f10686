"""Preview endpoint for images waiting in the upload queue."""

from fastapi import APIRouter, HTTPException, Response, status

from webhook_chat.state.previews import PREVIEW_ROUTE, get_preview_store

router = APIRouter(prefix=PREVIEW_ROUTE, tags=["previews"])


@router.get("/{token}")
async def get_preview(token: str) -> Response:
    """Serve the bytes of a queued image.

    Raises:
        404: The preview was never created or has been released.
    """
    preview = get_preview_store().get(token)
    if preview is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Preview not found",
        )

    content, media_type = preview
    return Response(
        content=content,
        media_type=media_type,
        headers={"Cache-Control": "no-store"},
    )
