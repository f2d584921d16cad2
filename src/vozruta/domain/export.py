"""Share-ready exports of one day of the ledger."""

import csv
import io
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from vozruta.domain.entities import Section, Trip

APP_NAME = "VozRuta"

WEEKDAYS = ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo")
MONTHS = (
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

SUMMARY_SECTIONS = (
    (Section.OUTBOUND, "VIAJES DE IDA"),
    (Section.RETURN, "VIAJES DE VUELTA"),
    (Section.PARCEL, "ENCOMIENDAS"),
)

TABLE_SECTIONS = (
    (Section.OUTBOUND, "VIAJES DE IDA"),
    (Section.PARCEL, "VIAJES DE ENCOMIENDA"),
    (Section.RETURN, "VIAJES DE VUELTA"),
)

CSV_HEADER = ("fecha", "seccion", "hora", "pasajero", "destino", "descripcion", "importe")


def format_long_date(value: date) -> str:
    """Format a date as "lunes, 19 de octubre"."""
    return f"{WEEKDAYS[value.weekday()]}, {value.day} de {MONTHS[value.month - 1]}"


def format_currency(amount: Decimal, decimals: int = 2) -> str:
    """Format an amount in pesos the Argentine way: "$ 35.000,00"."""
    quantum = Decimal(1).scaleb(-decimals)
    value = Decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)
    text = f"{value:,.{decimals}f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"$ {text}"


def _plain_amount(amount: Decimal) -> str:
    value = Decimal(amount)
    if value == value.to_integral_value():
        return str(value.to_integral_value())
    return format(value.normalize(), "f")


def daily_summary_text(trip_date: date, trips: Sequence[Trip], total: Decimal) -> str:
    """Summary message with the day's total and one block per non-empty section."""
    lines = [
        f"🚖 *Resumen de Viajes - {format_long_date(trip_date)}*",
        f"💰 *Total Recaudado: {format_currency(total)}*",
        "",
    ]
    for section, label in SUMMARY_SECTIONS:
        section_trips = [trip for trip in trips if trip.section == section]
        if not section_trips:
            continue
        lines.append(f"*{label}*")
        for trip in section_trips:
            lines.append(f"- {trip.description}: {format_currency(trip.amount)}")
        lines.append("")
    lines.append(f"_Generado por: {APP_NAME}_")
    return "\n".join(lines)


def _table_row(trip: Trip) -> str:
    where = (trip.destination or "").strip()
    parts = [trip.time or "--:--", trip.who]
    if where:
        parts.append(f"a {where}")
    return f"- {' '.join(parts)}  |  {format_currency(trip.amount, decimals=0)}"


def daily_table_text(trip_date: date, trips: Sequence[Trip], total: Decimal) -> str:
    """Day sheet listing every section with its count, time, passenger and destination."""
    lines = [
        f"📅 *{format_long_date(trip_date)}*",
        f"💰 *TOTAL: {format_currency(total, decimals=0)}*",
        "",
    ]
    for section, label in TABLE_SECTIONS:
        section_trips = [trip for trip in trips if trip.section == section]
        lines.append(f"*{label}* ({len(section_trips)})")
        if not section_trips:
            lines.append("- Sin registros")
        lines.extend(_table_row(trip) for trip in section_trips)
        lines.append("")
    lines.append(f"_Generado por: {APP_NAME}_")
    return "\n".join(lines)


def _csv_field(value: object) -> str:
    if value is None:
        return ""
    return " ".join(str(value).splitlines()).strip()


def daily_csv(trip_date: date, trips: Sequence[Trip]) -> str:
    """CSV with one row per trip of the day."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for trip in trips:
        writer.writerow(
            [
                _csv_field(trip_date.isoformat()),
                _csv_field(trip.section.value),
                _csv_field(trip.time),
                _csv_field(trip.passenger),
                _csv_field(trip.destination),
                _csv_field(trip.description),
                _plain_amount(trip.amount),
            ]
        )
    return buffer.getvalue()
