"""Invoice state machine and amount arithmetic.

Use cases call these helpers instead of touching `status` or the derived
amount fields directly, so every mutation goes through the same rules.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple

from src.domain.errors import InvalidStateError, ValidationError
from src.domain.invoice import Invoice, InvoiceStatus

CENTS = Decimal("0.01")

ALLOWED_TRANSITIONS: dict[InvoiceStatus, set[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: {InvoiceStatus.ISSUED, InvoiceStatus.CANCELLED},
    InvoiceStatus.ISSUED: {
        InvoiceStatus.PARTIAL,
        InvoiceStatus.PAID,
        InvoiceStatus.OVERDUE,
        InvoiceStatus.CANCELLED,
    },
    InvoiceStatus.PARTIAL: {
        InvoiceStatus.PAID,
        InvoiceStatus.OVERDUE,
        InvoiceStatus.CANCELLED,
    },
    InvoiceStatus.OVERDUE: {
        InvoiceStatus.PARTIAL,
        InvoiceStatus.PAID,
        InvoiceStatus.CANCELLED,
    },
    InvoiceStatus.PAID: set(),
    InvoiceStatus.CANCELLED: set(),
}

OVERDUE_CANDIDATE_STATUSES = (InvoiceStatus.ISSUED, InvoiceStatus.PARTIAL)


class OverpaymentPolicy:
    REJECT = "reject"
    ALLOW = "allow"


def money(value) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def can_transition(current: InvoiceStatus, new: InvoiceStatus) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, set())


def assert_transition(current: InvoiceStatus, new: InvoiceStatus) -> None:
    if current == new:
        return
    if not can_transition(current, new):
        raise InvalidStateError(
            f"Invalid invoice transition: {current.value} -> {new.value}"
        )


def compute_line_total(quantity: Decimal, unit_price: Decimal) -> Decimal:
    if quantity <= 0:
        raise ValidationError("Line item quantity must be greater than 0")
    if unit_price < 0:
        raise ValidationError("Line item unit price cannot be negative")
    return money(quantity * unit_price)


def compute_totals(
    line_totals: Iterable[Decimal],
    discount_amount: Decimal = Decimal("0"),
    tax_amount: Decimal = Decimal("0"),
) -> Tuple[Decimal, Decimal]:
    """
    Compute invoice subtotal and total

    Args:
        line_totals: line_total of every line item
        discount_amount: Discount subtracted from the subtotal
        tax_amount: Tax added after the discount

    Returns:
        (subtotal, total)
    """
    line_totals = list(line_totals)
    if not line_totals:
        raise ValidationError("At least one line item is required")
    if discount_amount < 0 or tax_amount < 0:
        raise ValidationError("Discount and tax amounts cannot be negative")

    subtotal = money(sum(line_totals, Decimal("0")))
    if discount_amount > subtotal:
        raise ValidationError("Discount cannot exceed the invoice subtotal")

    total = money(subtotal - discount_amount + tax_amount)
    return subtotal, total


def issue(invoice: Invoice, invoice_number: str, now: datetime) -> None:
    if invoice.status != InvoiceStatus.DRAFT:
        raise InvalidStateError("Only draft invoices can be issued")
    if not invoice.invoice_number:
        invoice.invoice_number = invoice_number
    invoice.status = InvoiceStatus.ISSUED
    invoice.issued_at = now


def ensure_payment_allowed(
    invoice: Invoice,
    amount: Decimal,
    policy: str = OverpaymentPolicy.REJECT,
) -> None:
    if invoice.status == InvoiceStatus.CANCELLED:
        raise InvalidStateError("Cannot record payment for cancelled invoice")
    if invoice.status == InvoiceStatus.DRAFT:
        raise InvalidStateError("Only issued invoices can receive payments")
    if amount <= 0:
        raise ValidationError("Payment amount must be greater than 0")
    if policy == OverpaymentPolicy.REJECT and amount > invoice.balance_amount:
        raise ValidationError(
            f"Payment amount {money(amount)} exceeds outstanding balance "
            f"{money(invoice.balance_amount)}"
        )


def ensure_correction_allowed(
    invoice: Invoice,
    action: str,
    amount: Optional[Decimal] = None,
    other_payments: Decimal = Decimal("0"),
    policy: str = OverpaymentPolicy.REJECT,
) -> None:
    """
    Guard an edit or removal of an existing payment

    Args:
        invoice: Parent invoice
        action: "update" or "delete", used in the error message
        amount: New amount when the payment amount changes
        other_payments: Sum of the invoice's remaining payments
        policy: Overpayment policy
    """
    if invoice.status == InvoiceStatus.CANCELLED:
        raise InvalidStateError(f"Cannot {action} payment for cancelled invoice")
    if amount is None:
        return
    if amount <= 0:
        raise ValidationError("Payment amount must be greater than 0")
    available = invoice.total_amount - other_payments
    if policy == OverpaymentPolicy.REJECT and amount > available:
        raise ValidationError(
            f"Payment amount {money(amount)} exceeds outstanding balance {money(available)}"
        )


def apply_paid_amount(invoice: Invoice, paid_amount: Decimal, reopen: bool = False) -> None:
    """
    Recompute paid/balance/status from the sum of all payments

    With reopen, a payment correction may take a paid invoice back to
    partial, or to issued when nothing is paid any more. An overdue invoice
    that still has a balance stays overdue.
    """
    invoice.paid_amount = money(paid_amount)
    invoice.balance_amount = money(invoice.total_amount - invoice.paid_amount)

    if invoice.balance_amount <= 0:
        new_status = InvoiceStatus.PAID
    elif reopen and invoice.status == InvoiceStatus.OVERDUE:
        new_status = InvoiceStatus.OVERDUE
    elif reopen and invoice.paid_amount <= 0:
        new_status = InvoiceStatus.ISSUED
    else:
        new_status = InvoiceStatus.PARTIAL

    if not reopen:
        assert_transition(invoice.status, new_status)
    invoice.status = new_status


def cancel(invoice: Invoice, reason: Optional[str], now: datetime) -> None:
    if invoice.status == InvoiceStatus.PAID:
        raise InvalidStateError("Cannot cancel paid invoice")
    if invoice.status == InvoiceStatus.CANCELLED:
        raise InvalidStateError("Invoice is already cancelled")
    invoice.status = InvoiceStatus.CANCELLED
    invoice.cancelled_at = now
    invoice.cancelled_reason = reason


def is_overdue(invoice: Invoice, today: date) -> bool:
    return invoice.status in OVERDUE_CANDIDATE_STATUSES and invoice.due_date < today


def mark_overdue(invoice: Invoice) -> None:
    assert_transition(invoice.status, InvoiceStatus.OVERDUE)
    invoice.status = InvoiceStatus.OVERDUE
