"""ReportLab PDF Generation Service Implementation

Implements invoice PDF generation using ReportLab library.
"""

from io import BytesIO
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLineItem
from src.domain.payment import Payment
from src.domain.vehicle_inward import VehicleInward

CURRENCY = "Rs."
HEADER_COLOR = colors.HexColor("#2C3E50")
MUTED_COLOR = colors.HexColor("#7F8C8D")
GRID_COLOR = colors.HexColor("#BDC3C7")


def format_money(amount) -> str:
    return f"{CURRENCY} {amount:,.2f}"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Draft invoices render as PROFORMA, everything else as TAX INVOICE.
    """

    def generate_invoice(
        self,
        invoice: Invoice,
        line_items: List[InvoiceLineItem],
        payments: Optional[List[Payment]] = None,
        vehicle: Optional[VehicleInward] = None,
        company_name: str = "Workshop",
        company_address: str = "",
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=6,
            textColor=HEADER_COLOR,
        )
        label_style = ParagraphStyle(
            "LabelStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#E74C3C")
            if invoice.status == InvoiceStatus.DRAFT
            else HEADER_COLOR,
            spaceAfter=14,
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=MUTED_COLOR,
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        elements.append(Paragraph(company_name, title_style))
        if company_address:
            elements.append(Paragraph(company_address, header_style))
        elements.append(Spacer(1, 8 * mm))
        elements.append(
            Paragraph(
                "PROFORMA INVOICE" if invoice.status == InvoiceStatus.DRAFT else "TAX INVOICE",
                label_style,
            )
        )

        invoice_info = [
            ["Invoice Number:", invoice.invoice_number or "Not issued"],
            ["Invoice Date:", invoice.invoice_date.strftime("%d-%m-%Y")],
            ["Due Date:", invoice.due_date.strftime("%d-%m-%Y")],
            ["Status:", invoice.status.value.upper()],
        ]
        if invoice.cancelled_at:
            invoice_info.append(
                ["Cancelled:", f"{invoice.cancelled_at:%d-%m-%Y} ({invoice.cancelled_reason or '-'})"]
            )

        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED_COLOR),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(invoice_table)
        elements.append(Spacer(1, 8 * mm))

        # Bill To
        elements.append(Paragraph("Bill To:", bold_style))
        if vehicle:
            elements.append(Paragraph(vehicle.customer_name or "Customer", normal_style))
            if vehicle.customer_phone:
                elements.append(Paragraph(vehicle.customer_phone, normal_style))
            vehicle_line = vehicle.registration_number
            if vehicle.model:
                vehicle_line = f"{vehicle_line} ({vehicle.model})"
            elements.append(Paragraph(f"Vehicle: {vehicle_line}", normal_style))
        else:
            elements.append(Paragraph(f"Job: {invoice.vehicle_inward_id}", normal_style))
        elements.append(Spacer(1, 8 * mm))

        # Line items
        line_data = [["Product", "Brand", "Qty", "Unit Price", "Total"]]
        for line in line_items:
            line_data.append(
                [
                    line.product_name,
                    line.brand or "-",
                    f"{line.quantity:,.2f}".rstrip("0").rstrip("."),
                    format_money(line.unit_price),
                    format_money(line.line_total),
                ]
            )

        col_widths = [60 * mm, 30 * mm, 15 * mm, 30 * mm, 35 * mm]
        line_table = Table(line_data, colWidths=col_widths)
        line_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        totals_data = [["", "", "", "Subtotal:", format_money(invoice.subtotal_amount)]]
        if invoice.discount_amount:
            totals_data.append(["", "", "", "Discount:", f"- {format_money(invoice.discount_amount)}"])
        if invoice.tax_amount:
            totals_data.append(["", "", "", "Tax:", format_money(invoice.tax_amount)])
        totals_data.append(["", "", "", "Total:", format_money(invoice.total_amount)])
        totals_data.append(["", "", "", "Paid:", format_money(invoice.paid_amount)])
        totals_data.append(["", "", "", "Balance:", format_money(invoice.balance_amount)])

        total_row = len(totals_data) - 3
        totals_table = Table(totals_data, colWidths=col_widths)
        totals_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (3, 0), (-1, -1), "RIGHT"),
                    ("FONTNAME", (3, total_row), (-1, total_row), "Helvetica-Bold"),
                    ("LINEABOVE", (3, total_row), (-1, total_row), 1.5, HEADER_COLOR),
                    ("FONTNAME", (3, -1), (-1, -1), "Helvetica-Bold"),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(totals_table)

        if payments:
            elements.append(Spacer(1, 8 * mm))
            elements.append(Paragraph("Payments", bold_style))
            payment_data = [["Date", "Mode", "Reference", "Amount"]]
            for payment in payments:
                payment_data.append(
                    [
                        payment.payment_date.strftime("%d-%m-%Y"),
                        payment.payment_mode.value.replace("_", " ").title(),
                        payment.reference_number or "-",
                        format_money(payment.amount),
                    ]
                )
            payment_table = Table(payment_data, colWidths=[35 * mm, 35 * mm, 60 * mm, 40 * mm])
            payment_table.setStyle(
                TableStyle(
                    [
                        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                        ("FONTSIZE", (0, 0), (-1, -1), 9),
                        ("ALIGN", (-1, 0), (-1, -1), "RIGHT"),
                        ("LINEBELOW", (0, 0), (-1, 0), 0.5, GRID_COLOR),
                    ]
                )
            )
            elements.append(payment_table)

        elements.append(Spacer(1, 15 * mm))

        footer = (
            "<i>This is a proforma invoice for preview purposes only.</i>"
            if invoice.status == InvoiceStatus.DRAFT
            else "<i>Thank you for your business.</i>"
        )
        if invoice.notes:
            elements.append(Paragraph(invoice.notes, normal_style))
            elements.append(Spacer(1, 5 * mm))
        elements.append(
            Paragraph(
                footer,
                ParagraphStyle(
                    "FooterNote",
                    parent=styles["Normal"],
                    fontSize=9,
                    textColor=colors.HexColor("#95A5A6"),
                ),
            )
        )

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
