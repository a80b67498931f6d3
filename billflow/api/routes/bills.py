"""Bill API Routes

FastAPI routes for creating, editing, listing and exporting bills.
"""

from datetime import date
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from billflow.api.schemas.bill_request import BillRequestSchema, CalculateBillRequestSchema
from billflow.app.services.drive_service import DriveSyncService
from billflow.app.services.pdf_service import PdfService
from billflow.app.use_cases.billing import (
    CalculateBill,
    CalculateBillCommandDTO,
    CreateBill,
    DeleteBill,
    ExportBillPdf,
    ExportBillsCsv,
    GetBill,
    GetNewBillDraft,
    ListBills,
    UpdateBill,
)
from billflow.app.use_cases.billing.dtos import (
    BillResponseDTO,
    DeleteBillResponseDTO,
    ListBillsResponseDTO,
)
from billflow.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from billflow.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from billflow.domain.bill_draft import BillDraft
from billflow.domain.bill_filter import FilterOptions, SearchField, TimeRange
from billflow.domain.company import CompanyProfile
from billflow.depends import (
    get_company_profile,
    get_drive_sync_service,
    get_pdf_service,
    get_session,
)
from billflow.api.error import ClientError

router = APIRouter(prefix="/bills", tags=["Bills"])

ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "BILL_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_BILL_EDIT": status.HTTP_400_BAD_REQUEST,
}

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Bill not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "BILL_NOT_FOUND",
                        "message": "Bill with ID 5f0c3e7b9a2d4c6e8f1a2b3c4d5e6f70 not found"
                    }
                }
            }
        }
    }
}

VALIDATION_RESPONSE = {
    422: {
        "description": "Validation error",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "VALIDATION_ERROR",
                        "message": "Bill validation failed",
                        "details": {"buyer_name": "Buyer name is required"}
                    }
                }
            }
        }
    }
}


def raise_for_error(result) -> None:
    """Raise ClientError for a failed use case result"""
    if result.is_err():
        raise ClientError(
            result.error,
            status_code=ERROR_STATUS.get(result.error.code, status.HTTP_503_SERVICE_UNAVAILABLE),
        )


@router.get("", response_model=ListBillsResponseDTO)
async def list_bills(
    time_range: TimeRange = Query(TimeRange.LAST_3_MONTHS),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    search_term: str = Query(""),
    search_field: SearchField = Query(SearchField.BUYER_NAME),
    session: AsyncSession = Depends(get_session),
):
    """
    List bills in a time window, newest invoice date first.

    **Query parameters:**
    - `time_range`: last1month, last3months (default), last6months, custom
    - `start_date` / `end_date`: inclusive bounds for custom ranges
    - `search_term`: case-insensitive substring
    - `search_field`: buyerName (default), invoiceNo, gstin
    """
    options = FilterOptions(
        time_range=time_range,
        start_date=start_date,
        end_date=end_date,
        search_term=search_term,
        search_field=search_field,
    )
    result = await ListBills(SqlAlchemyBillRepository(session)).execute(options)
    raise_for_error(result)
    return result.value


@router.get("/new", response_model=BillDraft)
async def new_bill_draft(session: AsyncSession = Depends(get_session)):
    """
    Blank draft with today's date and the next invoice number of the year.
    """
    result = await GetNewBillDraft(SqlAlchemyBillRepository(session)).execute()
    raise_for_error(result)
    return result.value


@router.post(
    "/calculate",
    response_model=BillDraft,
    responses={
        400: {
            "description": "Edit rejected",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_BILL_EDIT",
                            "message": "At least one item is required"
                        }
                    }
                }
            }
        }
    }
)
async def calculate_bill(request: CalculateBillRequestSchema):
    """
    Recompute a draft's amounts, taxes, grand total and words without
    saving. An optional `edit` (update_item, add_item, remove_item,
    set_tax_rate) is applied first.
    """
    command = CalculateBillCommandDTO(draft=request.bill.to_draft(), edit=request.edit)
    result = await CalculateBill().execute(command)
    raise_for_error(result)
    return result.value


@router.post(
    "",
    response_model=BillResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses=VALIDATION_RESPONSE,
)
async def create_bill(
    request: BillRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Save a new bill. Totals are recomputed server-side and the bill is
    saved as final. An empty `invoice_no` gets the next number.
    """
    use_case = CreateBill(SqlAlchemyUnitOfWork(session), SqlAlchemyBillRepository(session))
    result = await use_case.execute(request.to_draft())
    raise_for_error(result)
    return result.value


@router.get("/export.csv")
async def export_bills_csv(session: AsyncSession = Depends(get_session)):
    """
    Download a CSV backup of every bill (billflow_backup_YYYY-MM-DD.csv).
    """
    result = await ExportBillsCsv(SqlAlchemyBillRepository(session)).execute()
    raise_for_error(result)

    return Response(
        content=result.value.content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={result.value.filename}"},
    )


@router.get("/{bill_id}", response_model=BillResponseDTO, responses=NOT_FOUND_RESPONSE)
async def get_bill(bill_id: str, session: AsyncSession = Depends(get_session)):
    """Retrieve one bill."""
    result = await GetBill(SqlAlchemyBillRepository(session)).execute(bill_id)
    raise_for_error(result)
    return result.value


@router.put(
    "/{bill_id}",
    response_model=BillResponseDTO,
    responses={**NOT_FOUND_RESPONSE, **VALIDATION_RESPONSE},
)
async def update_bill(
    bill_id: str,
    request: BillRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Save edits to a bill. Same validation as creation."""
    use_case = UpdateBill(SqlAlchemyUnitOfWork(session), SqlAlchemyBillRepository(session))
    result = await use_case.execute(bill_id, request.to_draft())
    raise_for_error(result)
    return result.value


@router.delete("/{bill_id}", response_model=DeleteBillResponseDTO, responses=NOT_FOUND_RESPONSE)
async def delete_bill(
    bill_id: str,
    session: AsyncSession = Depends(get_session),
    drive_service: DriveSyncService = Depends(get_drive_sync_service),
):
    """Delete a bill and, when synced, its Drive copy (best effort)."""
    use_case = DeleteBill(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyBillRepository(session),
        drive_service=drive_service,
    )
    result = await use_case.execute(bill_id)
    raise_for_error(result)
    return result.value


@router.get(
    "/{bill_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        **NOT_FOUND_RESPONSE,
    }
)
async def download_bill_pdf(
    bill_id: str,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    drive_service: DriveSyncService = Depends(get_drive_sync_service),
    company: CompanyProfile = Depends(get_company_profile),
):
    """
    Download the tax invoice PDF and sync it to Drive.

    The PDF is returned even when sync fails. Response headers:
    - `X-Drive-Sync`: synced, skipped or failed
    - `X-Drive-Link`: Drive link when known
    """
    use_case = ExportBillPdf(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyBillRepository(session),
        pdf_service,
        drive_service,
        company,
    )
    result = await use_case.execute(bill_id)
    raise_for_error(result)

    export = result.value
    headers = {
        "Content-Disposition": f"attachment; filename={export.filename}",
        "X-Drive-Sync": export.sync_status,
    }
    if export.drive_link:
        headers["X-Drive-Link"] = export.drive_link
    if export.sync_error:
        headers["X-Drive-Sync-Error"] = quote(export.sync_error)

    return Response(content=export.pdf_bytes, media_type="application/pdf", headers=headers)
