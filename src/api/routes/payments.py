"""Payment API Routes

Corrections to payments already recorded against an invoice.
"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.dependencies import require_tenant_member
from src.api.error import ClientError
from src.api.routes.invoices import _error_example
from src.api.schemas.invoice_request import UpdatePaymentRequestSchema
from src.adapter.repositories import SqlAlchemyInvoiceRepository, SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import (
    DeletePayment,
    DeletePaymentResponseDTO,
    RecordPaymentResponseDTO,
    UpdatePayment,
    UpdatePaymentCommandDTO,
)
from src.depends import get_session
from src.domain.tenant_context import TenantContext

router = APIRouter(prefix="/payments", tags=["Payments"])

PAYMENT_NOT_FOUND_RESPONSE = _error_example("Payment not found", "NOT_FOUND", "Payment not found")


@router.put(
    "/{payment_id}",
    response_model=RecordPaymentResponseDTO,
    responses={
        400: _error_example(
            "Invalid amount or overpayment",
            "VALIDATION_ERROR",
            "Payment amount 2500.00 exceeds outstanding balance 2000.00",
        ),
        404: PAYMENT_NOT_FOUND_RESPONSE,
        409: _error_example(
            "Invoice is cancelled",
            "INVALID_STATE",
            "Cannot update payment for cancelled invoice",
        ),
    },
)
async def update_payment(
    payment_id: str,
    request: UpdatePaymentRequestSchema,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    Correct a recorded payment.

    Only the fields present in the body change. The invoice's paid amount,
    balance and status are recomputed, which can take a paid invoice back to
    `partial`.

    **Returns:**
    - 200: Corrected payment, with the updated invoice
    - 400: Amount not positive, or exceeds the balance
    - 404: Payment not found
    - 409: Invoice is cancelled
    """
    use_case = UpdatePayment(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        overpayment_policy=ApplicationConfig.OVERPAYMENT_POLICY,
    )
    result = await use_case.execute(
        context, payment_id, UpdatePaymentCommandDTO(**request.model_dump(exclude_unset=True))
    )

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.delete(
    "/{payment_id}",
    response_model=DeletePaymentResponseDTO,
    responses={
        404: PAYMENT_NOT_FOUND_RESPONSE,
        409: _error_example(
            "Invoice is cancelled",
            "INVALID_STATE",
            "Cannot delete payment for cancelled invoice",
        ),
    },
)
async def delete_payment(
    payment_id: str,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """Delete a payment recorded in error and recompute the invoice."""
    use_case = DeletePayment(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(context, payment_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
