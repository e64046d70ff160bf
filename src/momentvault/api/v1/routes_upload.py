"""Upload API routes."""

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from momentvault.core.logging import upload_id_context
from momentvault.models.upload import FileMetadata, FundingStatusResponse, UploadResponse
from momentvault.upload.content_types import classify
from momentvault.upload.exceptions import MomentVaultError
from momentvault.upload.funding import check_funding
from momentvault.upload.selector import HybridUploader
from momentvault.upload.service import get_uploader

router = APIRouter(prefix="/api/v1", tags=["upload"])
logger = logging.getLogger(__name__)


@router.post("/upload-file", response_model=UploadResponse, status_code=200)
async def upload_file(
    file: UploadFile = File(...),
    uploader: HybridUploader = Depends(get_uploader),
) -> UploadResponse:
    """Upload a media file to decentralized storage."""
    token = upload_id_context.set(str(uuid4()))
    try:
        file_name = file.filename or "unnamed"

        file.file.seek(0, 2)
        size_bytes = file.file.tell()
        file.file.seek(0)

        logger.info(
            f"Upload request received: {file_name}",
            extra={"file_name": file_name, "size_bytes": size_bytes, "mimetype": file.content_type},
        )

        try:
            result = await uploader.upload(file.file, file_name)
        except MomentVaultError as e:
            logger.error(
                f"Upload failed: {e}",
                exc_info=True,
                extra={"file_name": file_name, "size_bytes": size_bytes, "error_type": type(e).__name__},
            )
            raise HTTPException(status_code=e.status_code, detail=str(e))

        return UploadResponse(
            url=result.url,
            uri=result.uri,
            transaction_id=result.transaction_id,
            network=result.network,
            upload_path=result.path,
            metadata=FileMetadata(
                original_name=file_name,
                size_bytes=size_bytes,
                content_type=file.content_type or classify(file_name),
            ),
        )
    finally:
        upload_id_context.reset(token)


@router.get("/funding/status", response_model=FundingStatusResponse)
async def funding_status(
    size_bytes: int = Query(..., gt=0),
    uploader: HybridUploader = Depends(get_uploader),
) -> FundingStatusResponse:
    """Report price and balance for a payload size on the primary network."""
    try:
        state = await check_funding(uploader.primary, size_bytes)
    except MomentVaultError as e:
        logger.error(f"Funding status check failed: {e}", exc_info=True)
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return FundingStatusResponse(
        network=state.network,
        size_bytes=size_bytes,
        price=state.price,
        balance=state.balance,
        has_sufficient_funds=state.has_sufficient_funds,
    )
