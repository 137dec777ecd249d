"""
app/api/routers/csv_analysis.py

CSV upload and analysis HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from app.api.dependencies import get_csv_upload, read_csv_text
from app.config import get_csv_analysis_settings
from app.domain.errors import CSVAnalysisError
from app.schemas.csv_analysis import CSVUploadResponse, DataAnalysisResponse
from app.services.csv_analysis_service import CSVUploadService, get_csv_upload_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/csv", tags=["csv"])


@router.post(
    "/upload",
    response_model=CSVUploadResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
def upload_csv(
    file: UploadFile = Depends(get_csv_upload),
    upload_service: CSVUploadService = Depends(get_csv_upload_service),
) -> CSVUploadResponse:
    """
    Analyse one uploaded sales CSV and return summary, chart data and insights.
    """

    try:
        raw_text = read_csv_text(file, max_bytes=get_csv_analysis_settings().max_upload_bytes)
        file_name = file.filename or "upload.csv"
        result = upload_service.process_upload(file_name=file_name, raw_text=raw_text)
    except CSVAnalysisError as exc:
        logger.info("Rejected CSV upload %r: %s", file.filename, exc)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.user_message,
        ) from exc
    finally:
        file.file.close()

    analysis = DataAnalysisResponse.from_analysis(result.analysis)
    return CSVUploadResponse(
        data_id=result.stored.id,
        file_name=result.file_name,
        record_count=result.analysis.row_count,
        columns=list(result.analysis.columns),
        insights=result.insights,
        chart_data=analysis.chart_data,
        raw_data=result.preview,
        summary=analysis.summary,
        ai_used=result.ai_used,
    )
