"""Rendering of outgoing notification emails."""

from __future__ import annotations

from datetime import date
from html import escape

from portal.core.config import settings
from portal.models.employee import Employee
from portal.models.employee_request import EmployeeRequest, RequestType
from portal.services.notification_dispatcher import RenderedMessage

REQUEST_TYPE_LABELS = {
    RequestType.VACATION.value: "vacaciones",
    RequestType.PERMIT.value: "permiso",
    RequestType.CERTIFICATION.value: "certificación laboral",
    RequestType.MEDICAL_LEAVE.value: "incapacidad",
}

MONTHS_ES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def format_date_es(value: date | None) -> str:
    """Format a date like "14 de octubre de 2025"."""
    if value is None:
        return ""
    return f"{value.day} de {MONTHS_ES[value.month - 1]} de {value.year}"


def _layout(heading: str, title: str, body_html: str, link: str, link_label: str) -> str:
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\"></head><body>"
        "<div style=\"max-width:600px;margin:0 auto;font-family:Segoe UI,Arial,sans-serif\">"
        f"<div style=\"background:#BF913B;color:#fff;padding:32px;text-align:center\">"
        f"<h1>{escape(settings.APP_NAME)}</h1><p>{escape(heading)}</p></div>"
        f"<div style=\"padding:32px;text-align:center\"><h2>{escape(title)}</h2>"
        f"<div>{body_html}</div>"
        f"<p><a href=\"{escape(link)}\">{escape(link_label)}</a></p></div>"
        "<div style=\"background:#F1EBD0;padding:20px;text-align:center\">"
        f"<p><strong>{escape(settings.APP_NAME)}</strong></p>"
        "<p>Este es un mensaje automático del sistema. Por favor, no responda a este correo.</p>"
        "</div></div></body></html>"
    )


def render_announcement(title: str, body: str) -> RenderedMessage:
    link = f"{settings.PORTAL_URL}/perfil/comunicados"
    body_html = escape(body).replace("\n", "<br>")
    return RenderedMessage(
        subject=f"Nuevo Comunicado: {title}",
        html=_layout("Nuevo Comunicado Disponible", title, body_html, link, "Ver Comunicado Completo"),
        text=(
            f"Nuevo Comunicado: {title}\n\n{body}\n\n"
            f"Puede ver el comunicado completo en: {link}"
        ),
    )


def render_request(
    request: EmployeeRequest,
    employee: Employee,
    leave_days: int | None = None,
) -> RenderedMessage:
    label = REQUEST_TYPE_LABELS.get(str(request.request_type), str(request.request_type))
    link = f"{settings.PORTAL_URL}/administracion/solicitudes"

    lines = [
        f"Colaborador: {employee.full_name}",
        f"Cédula: {employee.national_id or ''}",
        f"Empresa: {employee.company_name or ''}",
    ]
    if request.start_date is not None:
        lines.append(f"Fecha de inicio: {format_date_es(request.start_date)}")  # type: ignore[arg-type]
    if request.end_date is not None:
        lines.append(f"Fecha de fin: {format_date_es(request.end_date)}")  # type: ignore[arg-type]
    if leave_days is not None:
        lines.append(f"Días solicitados: {leave_days}")
    if request.reason:
        lines.append(f"Motivo: {request.reason}")

    title = f"Nueva solicitud de {label}"
    body_html = "<br>".join(escape(line) for line in lines)
    return RenderedMessage(
        subject=f"{title} - {employee.full_name}",
        html=_layout(title, title, body_html, link, "Revisar solicitud"),
        text=f"{title}\n\n" + "\n".join(lines) + f"\n\nRevise la solicitud en: {link}",
    )
