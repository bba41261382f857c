# cotisations/exports.py
import csv
import io
import logging
import re
from html import escape

from django.core.exceptions import ValidationError
from django.http import HttpResponse
from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from .engine import pledge_status, remaining_amount

logger = logging.getLogger(__name__)

PLEDGE_HEADERS = ['Membre', 'Attendu', 'Versé', 'Solde', 'Statut']
REPORT_HEADERS = ['Campagne', 'Total Attendu', 'Total Reçu', 'Taux (%)', 'Membres à jour', 'Membres en retard']

FORMATS = ('csv', 'pdf', 'word')

WORD_TEMPLATE = (
    "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
    "xmlns:w='urn:schemas-microsoft-com:office:word' "
    "xmlns='http://www.w3.org/TR/REC-html40'>"
    "<head><meta charset='utf-8'><title>{title}</title></head>"
    "<body><h2>{heading}</h2><table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table></body></html>"
)


def format_amount(value, currency='XOF'):
    return f"{value:,.0f}".replace(',', ' ') + f" {currency}"


def safe_filename(name):
    return re.sub(r'[^a-z0-9]', '_', name, flags=re.IGNORECASE).lower()


# ----------------------------------------------------
# Lignes à exporter
# ----------------------------------------------------
def pledge_rows(pledges, currency='XOF', today=None):
    rows = []
    for pledge in pledges:
        rows.append([
            pledge.member_name,
            format_amount(pledge.expected_amount, currency),
            format_amount(pledge.paid_amount, currency),
            format_amount(remaining_amount(pledge), currency),
            pledge_status(pledge, today),
        ])
    return rows


def report_rows(stats, currency='XOF'):
    return [
        [
            s['name'],
            format_amount(s['total_expected'], currency),
            format_amount(s['total_received'], currency),
            f"{s['rate']:.1f}%",
            str(s['members_up_to_date']),
            str(s['members_late']),
        ]
        for s in stats
    ]


# ----------------------------------------------------
# Composition des fichiers
# ----------------------------------------------------
def build_csv(headers, rows):
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL)
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def build_pdf(title, headers, rows, footer=''):
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(A4), title=title)
    styles = getSampleStyleSheet()
    elements = [Paragraph(f"<b>{escape(title)}</b>", styles["Title"]), Spacer(1, 0.3 * inch)]

    table = Table([headers] + rows, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#1e3a5f')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f3f4f6')]),
    ]))
    elements.append(table)

    if footer:
        elements.append(Spacer(1, 0.3 * inch))
        elements.append(Paragraph(escape(footer), styles["Normal"]))

    doc.build(elements)
    return buffer.getvalue()


def build_word(title, heading, headers, rows):
    head = ''.join(f"<th>{escape(h)}</th>" for h in headers)
    body = ''.join(
        "<tr>" + ''.join(f"<td>{escape(str(cell))}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return WORD_TEMPLATE.format(title=escape(title), heading=escape(heading), head=head, body=body)


def export_response(fmt, filename, title, heading, headers, rows, footer=''):
    if fmt == 'csv':
        response = HttpResponse(build_csv(headers, rows), content_type='text/csv; charset=utf-8')
        ext = 'csv'
    elif fmt == 'pdf':
        response = HttpResponse(build_pdf(heading, headers, rows, footer), content_type='application/pdf')
        ext = 'pdf'
    elif fmt == 'word':
        response = HttpResponse(build_word(title, heading, headers, rows),
                                content_type='application/vnd.ms-word; charset=utf-8')
        ext = 'doc'
    else:
        raise ValidationError("Format d'export inconnu.")
    response['Content-Disposition'] = f'attachment; filename="{filename}.{ext}"'
    logger.info("Export %s généré : %s.%s", fmt, filename, ext)
    return response


def export_campaign_pledges(campaign, pledges, fmt, today=None):
    pledges = list(pledges)
    if not pledges:
        raise ValidationError("Aucun membre à exporter pour les filtres actuels.")
    church = campaign.church
    date = (today or timezone.localdate()).isoformat()
    return export_response(
        fmt,
        f"suivi_{safe_filename(campaign.name)}_{date}",
        "Export Suivi",
        f"Suivi de la cotisation: {campaign.name}",
        PLEDGE_HEADERS,
        pledge_rows(pledges, church.currency, today),
        footer=church.pdf_footer_text,
    )


def export_campaign_report(church, stats, fmt, today=None):
    stats = list(stats)
    if not stats:
        raise ValidationError("Aucune campagne à exporter pour les filtres actuels.")
    date = (today or timezone.localdate()).isoformat()
    return export_response(
        fmt,
        f"rapport_cotisations_{date}",
        "Export Cotisations",
        "Rapport Global des Cotisations",
        REPORT_HEADERS,
        report_rows(stats, church.currency),
        footer=church.pdf_footer_text,
    )
