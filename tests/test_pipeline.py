import json
import tempfile
import unittest
from pathlib import Path

import pandas as pd

from reportsheets.cli import main
from reportsheets.pipeline import (
    build_report_grid,
    convert_input_tree,
    list_report_files,
    process_directory_to_workbook,
)


class _Logger:
    def __init__(self):
        self.messages = []
        self.errors = []

    def info(self, msg):
        self.messages.append(msg)

    def error(self, msg):
        self.errors.append(msg)


TICKET_ROWS = [
    {
        "Mes_Anio": "Enero 2025",
        "Nombre_Unidad": "Pierre",
        "Cantidad_Tickets": 3,
        "Total_Tiempo_Productivo": "1:00:00",
        "Promedio_Tiempo_Productivo": "0:20:00",
        "Promedio_Tiempo_Estimado": "0:50:00",
        "Porcentaje_Cumplimiento": "83.33",
    },
    {
        "Mes_Anio": "Febrero 2025",
        "Nombre_Unidad": "Pierre",
        "Cantidad_Tickets": 2,
        "Total_Tiempo_Productivo": "0:30:00",
        "Promedio_Tiempo_Productivo": "0:15:00",
        "Promedio_Tiempo_Estimado": "0:20:00",
        "Porcentaje_Cumplimiento": "66.67",
    },
]


def _write(path: Path, payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(payload, str):
        path.write_text(payload, encoding="utf-8")
    else:
        path.write_text(json.dumps(payload), encoding="utf-8")


class BuildReportGridTests(unittest.TestCase):
    def test_tickets_general_grid_layout(self):
        grid = build_report_grid(_Logger(), "Tickets_General.json", TICKET_ROWS)

        # 12 filled months
        self.assertListEqual(grid[0], list(TICKET_ROWS[0].keys()))
        self.assertListEqual(grid[1], list(TICKET_ROWS[0].values()))
        self.assertListEqual(grid[3], ["Marzo 2025", "Pierre", 0, "00:00:00", "00:00:00", "00:00:00", "0.00"])

        # accumulation
        self.assertListEqual(grid[13], [])
        self.assertListEqual(grid[14], [])
        self.assertListEqual(grid[15], grid[0])
        self.assertListEqual(
            grid[16],
            ["Acumulado 2025", "Pierre", 5, "1:30:00", "0:18:00", "0:38:00", "211.11"],
        )

        # five pivot tables of 16 rows each
        self.assertListEqual(grid[17], [])
        self.assertListEqual(grid[18], [])
        self.assertListEqual(grid[19], ["CANTIDAD TICKETS"])
        self.assertListEqual(grid[20], ["Mes", "Pierre"])
        self.assertListEqual(grid[21], ["Enero 2025", 3])
        self.assertListEqual(grid[33], ["TOTAL", 5])
        self.assertEqual(len(grid), 18 + 5 * 16)

        # Promedio_* totals: average over months with time recorded
        promedio_total = grid[18 + 2 * 16 + 15]
        self.assertListEqual(promedio_total, ["TOTAL", "0:17:30"])

    def test_plain_report_is_passed_through(self):
        rows = [{"Departamento": "Cocina", "Etiqueta": "Fuga"}]
        grid = build_report_grid(_Logger(), "Etiquetas.json", rows)
        self.assertListEqual(grid, [["Departamento", "Etiqueta"], ["Cocina", "Fuga"]])


class DirectoryTests(unittest.TestCase):
    def test_bad_report_does_not_stop_the_batch(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "Input"
            _write(root / "b_bad.json", "[{not json")
            _write(root / "a_good.json", TICKET_ROWS)
            _write(root / "c_empty.JSON", [])
            _write(root / "notes.txt", "ignored")

            logger = _Logger()
            out = process_directory_to_workbook(logger, root, Path(tmp) / "Output" / "General.xlsx")

            self.assertIsNotNone(out)
            self.assertEqual([p.name for p in list_report_files(root)], ["a_good.json", "b_bad.json", "c_empty.JSON"])
            self.assertListEqual(list(pd.read_excel(out, sheet_name=None, header=None)), ["a_good"])
            self.assertEqual(len(logger.errors), 1)
            self.assertIn("b_bad.json", logger.errors[0])

    def test_directory_without_reports_writes_nothing(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root / "empty.json", [])
            out = process_directory_to_workbook(_Logger(), root, root / "out.xlsx")

            self.assertIsNone(out)
            self.assertFalse((root / "out.xlsx").exists())

    def test_unwritable_text_is_cleaned_not_fatal(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "Input"
            _write(root / "a_good.json", TICKET_ROWS)
            _write(root / "b_text.json", [{"Departamento": "Co\x01cina", "Cantidad": 1}])

            logger = _Logger()
            out = process_directory_to_workbook(logger, root, Path(tmp) / "Output" / "General.xlsx")

            sheets = pd.read_excel(out, sheet_name=None, header=None)
            self.assertListEqual(list(sheets), ["a_good", "b_text"])
            self.assertEqual(sheets["b_text"].iloc[1, 0], "Cocina")
            self.assertListEqual(logger.errors, [])

    def test_report_without_sheet_name_is_skipped_and_tree_continues(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "Input"
            _write(root / ".json", TICKET_ROWS)
            _write(root / "a_good.json", TICKET_ROWS)
            _write(root / "Zeta" / "ok.json", TICKET_ROWS)

            logger = _Logger()
            written = convert_input_tree(logger, root, Path(tmp) / "Output")

            self.assertListEqual([p.name for p in written], ["General.xlsx", "Zeta.xlsx"])
            self.assertListEqual(list(pd.read_excel(written[0], sheet_name=None, header=None)), ["a_good"])
            self.assertEqual(len(logger.errors), 1)
            self.assertIn(".json", logger.errors[0])

    def test_convert_input_tree(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "Input"
            _write(root / "Tickets_General.json", TICKET_ROWS)
            _write(root / "Pierre" / "Tickets_Mantenimiento.json", TICKET_ROWS)
            (root / "Vacia").mkdir()

            written = convert_input_tree(_Logger(), root, Path(tmp) / "Output")

            self.assertListEqual([p.name for p in written], ["General.xlsx", "Pierre.xlsx"])
            self.assertTrue(all(p.exists() for p in written))

    def test_convert_input_tree_missing_input(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                convert_input_tree(_Logger(), Path(tmp) / "nope", Path(tmp) / "Output")

    def test_cli_returns_error_code_for_missing_input(self):
        with tempfile.TemporaryDirectory() as tmp:
            code = main(["--input-dir", str(Path(tmp) / "nope"), "--output-dir", tmp, "--log-level", "ERROR"])
            self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
