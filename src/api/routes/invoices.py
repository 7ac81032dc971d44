"""Invoice API Routes

FastAPI routes for the invoice lifecycle: create, issue, record payments,
cancel, list, summary and PDF download.
"""

import base64
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.dependencies import require_tenant_member
from src.api.error import ClientError
from src.api.schemas.invoice_request import (
    CancelInvoiceRequestSchema,
    CreateInvoiceRequestSchema,
    RecordPaymentRequestSchema,
)
from src.adapter.repositories import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceLineRepository,
    SqlAlchemyNotificationQueueRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyVehicleInwardRepository,
)
from src.adapter.services.invoice_number_generator import SqlInvoiceNumberGenerator
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import (
    CancelInvoice,
    CreateInvoice,
    CreateInvoiceCommandDTO,
    GetInvoice,
    GetInvoiceSummary,
    InvoiceListResponseDTO,
    InvoiceResponseDTO,
    InvoiceSummaryDTO,
    IssueInvoice,
    ListInvoices,
    ListInvoicesQueryDTO,
    ListPayments,
    PaymentDTO,
    RecordPayment,
    RecordPaymentCommandDTO,
    RecordPaymentResponseDTO,
    RenderInvoicePdf,
)
from src.depends import get_session
from src.domain.tenant_context import TenantContext

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _error_example(description: str, code: str, message: str) -> dict:
    return {
        "description": description,
        "content": {
            "application/json": {
                "example": {"error": {"code": code, "message": message}}
            }
        },
    }


NOT_FOUND_RESPONSE = _error_example("Invoice not found", "NOT_FOUND", "Invoice not found")
INVALID_STATE_RESPONSE = _error_example(
    "Operation not allowed in the invoice's current status",
    "INVALID_STATE",
    "Only draft invoices can be issued",
)
VALIDATION_RESPONSE = _error_example(
    "Validation error", "VALIDATION_ERROR", "At least one line item is required"
)


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: VALIDATION_RESPONSE,
        404: _error_example("Job not found", "NOT_FOUND", "Vehicle inward not found"),
    },
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    Create an invoice for a vehicle job.

    Totals are computed server side: `line_total = quantity × unit_price`,
    `subtotal = Σ line_total`, `total = subtotal − discount + tax`.
    With `issue_immediately` the invoice gets its number right away and the
    customer is notified.

    **Returns:**
    - 201: Invoice created (draft or issued)
    - 400: Invalid line items, amounts or dates
    - 404: Job not found for this tenant
    """
    use_case = CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        vehicle_repo=SqlAlchemyVehicleInwardRepository(session),
        number_generator=SqlInvoiceNumberGenerator(
            session, prefix=ApplicationConfig.INVOICE_NUMBER_PREFIX
        ),
        queue_repo=SqlAlchemyNotificationQueueRepository(session),
        due_days=ApplicationConfig.INVOICE_DUE_DAYS,
    )
    result = await use_case.execute(context, CreateInvoiceCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get("", response_model=InvoiceListResponseDTO)
async def list_invoices(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    from_date: Optional[date] = Query(default=None),
    to_date: Optional[date] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Invoice number contains"),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    List invoices, newest first.

    **Query parameters:**
    - `status`: draft, issued, partial, paid, overdue or cancelled
    - `from_date` / `to_date`: invoice date range
    - `search`: invoice number substring
    - `limit` / `offset`: pagination
    """
    query = ListInvoicesQueryDTO(
        status=status_filter,
        from_date=from_date,
        to_date=to_date,
        search=search,
        limit=limit,
        offset=offset,
    )
    result = await ListInvoices(SqlAlchemyInvoiceRepository(session)).execute(context, query)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get("/summary", response_model=InvoiceSummaryDTO)
async def get_invoice_summary(
    from_date: Optional[date] = Query(default=None),
    to_date: Optional[date] = Query(default=None),
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    Receivables overview: invoiced, received, outstanding and overdue totals.
    """
    use_case = GetInvoiceSummary(SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(context, from_date=from_date, to_date=to_date)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_invoice(
    invoice_id: str,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """Invoice with its line items and payments."""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(context, invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/issue",
    response_model=InvoiceResponseDTO,
    responses={404: NOT_FOUND_RESPONSE, 409: INVALID_STATE_RESPONSE},
)
async def issue_invoice(
    invoice_id: str,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    Issue a draft invoice.

    Assigns the next invoice number for the tenant and queues the
    `invoice_issued` notification with the invoice PDF.

    **Returns:**
    - 200: Invoice issued
    - 404: Invoice not found
    - 409: Invoice is not a draft
    """
    use_case = IssueInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        vehicle_repo=SqlAlchemyVehicleInwardRepository(session),
        number_generator=SqlInvoiceNumberGenerator(
            session, prefix=ApplicationConfig.INVOICE_NUMBER_PREFIX
        ),
        queue_repo=SqlAlchemyNotificationQueueRepository(session),
    )
    result = await use_case.execute(context, invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/payments",
    response_model=RecordPaymentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: _error_example(
            "Invalid amount or overpayment",
            "VALIDATION_ERROR",
            "Payment amount 600.00 exceeds outstanding balance 500.00",
        ),
        404: NOT_FOUND_RESPONSE,
        409: _error_example(
            "Invoice cannot receive payments",
            "INVALID_STATE",
            "Cannot record payment for cancelled invoice",
        ),
    },
)
async def record_payment(
    invoice_id: str,
    request: RecordPaymentRequestSchema,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    Record a payment against an issued invoice.

    `paid_amount` is recomputed from all payments; the invoice becomes
    `paid` once the balance reaches zero, otherwise `partial`.

    **Returns:**
    - 201: Payment recorded, with the updated invoice
    - 400: Amount not positive, or exceeds the balance
    - 404: Invoice not found
    - 409: Invoice is draft or cancelled
    """
    use_case = RecordPayment(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        vehicle_repo=SqlAlchemyVehicleInwardRepository(session),
        queue_repo=SqlAlchemyNotificationQueueRepository(session),
        overpayment_policy=ApplicationConfig.OVERPAYMENT_POLICY,
    )
    result = await use_case.execute(
        context, invoice_id, RecordPaymentCommandDTO(**request.model_dump())
    )

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}/payments",
    response_model=List[PaymentDTO],
    responses={404: NOT_FOUND_RESPONSE},
)
async def list_payments(
    invoice_id: str,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """Payments recorded against an invoice, oldest first."""
    use_case = ListPayments(SqlAlchemyInvoiceRepository(session), SqlAlchemyPaymentRepository(session))
    result = await use_case.execute(context, invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/cancel",
    response_model=InvoiceResponseDTO,
    responses={
        404: NOT_FOUND_RESPONSE,
        409: _error_example("Invoice cannot be cancelled", "INVALID_STATE", "Cannot cancel paid invoice"),
    },
)
async def cancel_invoice(
    invoice_id: str,
    request: Optional[CancelInvoiceRequestSchema] = None,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    Cancel an invoice. Paid invoices cannot be cancelled.
    """
    use_case = CancelInvoice(SqlAlchemyUnitOfWork(session), SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(context, invoice_id, reason=request.reason if request else None)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: NOT_FOUND_RESPONSE,
    },
)
async def download_invoice_pdf(
    invoice_id: str,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    Download the invoice as a PDF file.

    Draft invoices render as a proforma.
    """
    use_case = RenderInvoicePdf(
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        vehicle_repo=SqlAlchemyVehicleInwardRepository(session),
        pdf_service=ReportLabPdfService(),
        company_name=ApplicationConfig.COMPANY_NAME,
        company_address=ApplicationConfig.COMPANY_ADDRESS,
    )
    result = await use_case.execute(context, invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    pdf_bytes = base64.b64decode(result.value.pdf_base64)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={result.value.filename}"
        }
    )
