"""Tests for CLI commands."""

import pytest

from vozruta.capture.session import CaptureSession
from vozruta.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


class ScriptedBackend:
    """Capture backend returning a fixed transcript."""

    def __init__(self, transcript):
        self.transcript = transcript

    def is_available(self):
        return True

    def request_permission(self):
        return True

    async def start(self, locale, on_partial):
        return self.transcript

    async def stop(self):
        return None


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "VozRuta" in result.output


def test_parse(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "parse", "Maria viaje a Saenz 30000 a las 14:30", "--date", "2024-03-01")

    assert result.exit_code == 0
    assert "Passenger: Maria" in result.output
    assert "Destination: Saenz" in result.output
    assert "Amount: $ 30.000,00" in result.output
    assert "Time: 14:30" in result.output


def test_add_and_list(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "add", "Maria viaje a Saenz 30000", "--date", "2024-03-01")
    assert result.exit_code == 0
    assert "Created trip 1" in result.output
    assert "Description: Maria a Saenz" in result.output

    result = _invoke(
        cli_runner, temp_db, "add", "caja a Moreno $5.000", "--section", "encomienda", "--date", "2024-03-01"
    )
    assert result.exit_code == 0
    assert "Package type: caja" in result.output

    result = _invoke(cli_runner, temp_db, "list", "--date", "2024-03-01")
    assert result.exit_code == 0
    assert "Viernes, 1 de marzo" in result.output
    assert "Ida (1)" in result.output
    assert "Encomienda (1)" in result.output
    assert "Maria a Saenz" in result.output
    assert "Total: $ 35.000,00" in result.output


def test_add_with_spoken_date(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "add", "Ana a Pilar mañana 4000", "--date", "2024-03-01")
    assert result.exit_code == 0
    assert "Date: 2024-03-02" in result.output


def test_add_schedules_reminder(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "add", "Ana a Pilar 15:00 4000", "--date", "2099-01-01")
    assert result.exit_code == 0
    assert "Reminder: 2099-01-01 14:00" in result.output

    result = _invoke(
        cli_runner, temp_db, "add", "Ana a Pilar 15:00 4000", "--date", "2099-01-01", "--no-reminder"
    )
    assert "Reminder" not in result.output


def test_add_manual(cli_runner, temp_db):
    result = _invoke(
        cli_runner,
        temp_db,
        "add-manual",
        "--description",
        "Sobre a Lujan",
        "--amount",
        "1.250,50",
        "--time",
        "8:15",
        "--section",
        "encomienda",
        "--package-type",
        "sobre",
        "--date",
        "2024-03-01",
    )

    assert result.exit_code == 0
    assert "Amount: $ 1.250,50" in result.output
    assert "Time: 08:15" in result.output
    assert "Package type: sobre" in result.output


def test_add_manual_invalid_time(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "add-manual", "--description", "Viaje", "--amount", "100", "--time", "25:00"
    )
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_add_manual_invalid_amount(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "add-manual", "--description", "Viaje", "--amount", "mucho")
    assert result.exit_code == 1
    assert "Invalid amount format" in result.output


def test_invalid_date(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "list", "--date", "nunca jamás")
    assert result.exit_code == 1
    assert "Invalid date" in result.output


def test_delete(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "add", "Maria a Saenz 30000", "--date", "2024-03-01")

    result = _invoke(cli_runner, temp_db, "delete", "1", "--date", "2024-03-01")
    assert result.exit_code == 0
    assert "Deleted trip 1" in result.output

    result = _invoke(cli_runner, temp_db, "delete", "1")
    assert result.exit_code == 1
    assert "Trip 1 not found" in result.output


def test_totals(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "add", "Maria a Saenz 30000", "--date", "2024-03-01")
    _invoke(cli_runner, temp_db, "add", "Juan a Retiro 5000", "--section", "vuelta", "--date", "2024-03-01")

    result = _invoke(cli_runner, temp_db, "totals", "--date", "2024-03-01")

    assert result.exit_code == 0
    assert "$ 30.000,00" in result.output
    assert "$ 5.000,00" in result.output
    assert "$ 35.000,00" in result.output


def test_months(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "months")
    assert "No trips found." in result.output

    _invoke(cli_runner, temp_db, "add", "Maria a Saenz 30000", "--date", "2024-03-01")
    _invoke(cli_runner, temp_db, "add", "Juan a Retiro 5000", "--date", "2024-02-10")

    result = _invoke(cli_runner, temp_db, "months")
    assert result.exit_code == 0
    assert result.output.index("2024-03") < result.output.index("2024-02")


def test_calendar(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "add", "Maria a Saenz 30000", "--date", "2024-03-01")
    _invoke(cli_runner, temp_db, "add", "Juan a Retiro 5000", "--date", "2024-03-01")

    result = _invoke(cli_runner, temp_db, "calendar", "--month", "2024-03")

    assert result.exit_code == 0
    assert "Marzo 2024" in result.output
    assert "1:2" in result.output
    assert "(26)" in result.output
    assert "Trips this month: 2" in result.output


def test_calendar_invalid_month(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "calendar", "--month", "marzo")
    assert result.exit_code == 1
    assert "Invalid month" in result.output


@pytest.mark.parametrize(
    "export_format,expected",
    [
        ("summary", "Total Recaudado: $ 30.000,00"),
        ("table", "*VIAJES DE IDA* (1)"),
        ("csv", "fecha,seccion,hora,pasajero,destino,descripcion,importe"),
    ],
)
def test_export(cli_runner, temp_db, export_format, expected):
    _invoke(cli_runner, temp_db, "add", "Maria a Saenz 30000", "--date", "2024-03-01")

    result = _invoke(cli_runner, temp_db, "export", "--date", "2024-03-01", "--format", export_format)

    assert result.exit_code == 0
    assert expected in result.output


def test_export_to_file(cli_runner, temp_db, tmp_path):
    _invoke(cli_runner, temp_db, "add", "Maria a Saenz 30000", "--date", "2024-03-01")
    output = tmp_path / "viajes.csv"

    result = _invoke(
        cli_runner, temp_db, "export", "--date", "2024-03-01", "--format", "csv", "-o", str(output)
    )

    assert result.exit_code == 0
    assert "Exported 1 trips" in result.output
    assert "Maria a Saenz" in output.read_text(encoding="utf-8")


def test_listen(cli_runner, temp_db):
    session = CaptureSession(ScriptedBackend("Pedro viaje a Moreno 2000"))

    result = _invoke(
        cli_runner, temp_db, "listen", "--date", "2024-03-01", obj={"capture": session}
    )

    assert result.exit_code == 0
    assert 'Heard: "Pedro viaje a Moreno 2000"' in result.output
    assert "Created trip 1" in result.output
    assert "Description: Pedro a Moreno" in result.output


def test_listen_nothing_captured(cli_runner, temp_db):
    session = CaptureSession(ScriptedBackend(""))

    result = _invoke(cli_runner, temp_db, "listen", obj={"capture": session})

    assert result.exit_code == 1
    assert "Nothing was captured" in result.output


def test_unavailable_database(cli_runner, tmp_path):
    db_path = str(tmp_path / "missing" / "trips.db")
    result = cli_runner.invoke(cli, ["--db-path", db_path, "list"])
    assert result.exit_code == 1
    assert "Trip database is unavailable" in result.output
