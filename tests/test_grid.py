import unittest

from reportsheets.extract.reports import rows_to_frame
from reportsheets.transforms.grid import (
    accumulation_block,
    assemble_grid,
    pivot_block,
    pivot_columns,
    report_block,
)


def _frame():
    return rows_to_frame(
        [
            {"Mes_Anio": "Enero 2025", "Nombre_Unidad": "Pierre", "Cantidad": 2},
            {"Mes_Anio": "Enero 2025", "Nombre_Unidad": "Palacio", "Cantidad": None},
        ]
    )


class GridBlockTests(unittest.TestCase):
    def test_report_block_header_and_rows(self):
        self.assertListEqual(
            report_block(_frame()),
            [
                ["Mes_Anio", "Nombre_Unidad", "Cantidad"],
                ["Enero 2025", "Pierre", 2],
                ["Enero 2025", "Palacio", ""],
            ],
        )

    def test_accumulation_block_header_and_rows(self):
        acc = [
            {"Mes_Anio": "Acumulado 2025", "Nombre_Unidad": "Pierre", "Cantidad": 2},
            {"Mes_Anio": "Acumulado 2025", "Nombre_Unidad": "Palacio", "Cantidad": 0},
        ]
        block = accumulation_block(acc)
        self.assertListEqual(block[0], ["Mes_Anio", "Nombre_Unidad", "Cantidad"])
        self.assertListEqual(block[2], ["Acumulado 2025", "Palacio", 0])

    def test_accumulation_block_header_covers_every_unit(self):
        acc = [
            {"Mes_Anio": "Acumulado 2025", "Nombre_Unidad": "Pierre"},
            {"Mes_Anio": "Acumulado 2025", "Nombre_Unidad": "Palacio", "Cantidad": ""},
        ]
        block = accumulation_block(acc)
        self.assertListEqual(block[0], ["Mes_Anio", "Nombre_Unidad", "Cantidad"])
        self.assertListEqual(block[1], ["Acumulado 2025", "Pierre", ""])

    def test_absent_keys_render_blank(self):
        frame = rows_to_frame(
            [
                {"Mes_Anio": "Enero 2025", "Cantidad": 2},
                {"Cantidad": 3},
            ]
        )
        self.assertListEqual(report_block(frame)[2], ["", 3])

    def test_pivot_columns_fixed_unit_order(self):
        records = [
            {},
            {"Mes": "TITLE"},
            {"Mes": "Mes", "Zeta": "Zeta", "Palacio": "Palacio"},
            {"Mes": "Enero 2025", "Pierre": 1},
        ]
        self.assertListEqual(pivot_columns(records), ["Mes", "Pierre", "Palacio", "Zeta"])

    def test_pivot_block_reprojects_rows(self):
        records = [
            {},
            {"Mes": "CANTIDAD"},
            {"Mes": "Mes", "Palacio": "Palacio", "Pierre": "Pierre"},
            {"Mes": "Enero 2025", "Palacio": 5},
        ]
        self.assertListEqual(
            pivot_block(records),
            [
                [],
                ["CANTIDAD"],
                ["Mes", "Pierre", "Palacio"],
                ["Enero 2025", "", 5],
            ],
        )


class AssembleGridTests(unittest.TestCase):
    def test_no_accumulation_no_pivots_has_no_trailing_spacers(self):
        grid = assemble_grid(_frame(), [], [])
        self.assertListEqual(grid, report_block(_frame()))

    def test_block_order_and_spacers(self):
        acc = [{"Mes_Anio": "Acumulado 2025", "Nombre_Unidad": "Pierre", "Cantidad": 2}]
        records = [{}, {"Mes": "CANTIDAD"}, {"Mes": "Mes", "Pierre": "Pierre"}, {"Mes": "TOTAL", "Pierre": 2}]

        grid = assemble_grid(_frame(), acc, records)

        self.assertListEqual(grid[3], [])
        self.assertListEqual(grid[4], [])
        self.assertListEqual(grid[5], ["Mes_Anio", "Nombre_Unidad", "Cantidad"])
        self.assertListEqual(grid[6], ["Acumulado 2025", "Pierre", 2])
        self.assertListEqual(grid[7], [])
        self.assertListEqual(grid[8], [])
        self.assertListEqual(grid[9], ["CANTIDAD"])
        self.assertListEqual(grid[-1], ["TOTAL", 2])
        self.assertEqual(len(grid), 12)

    def test_pivots_without_accumulation(self):
        records = [{}, {"Mes": "CANTIDAD"}]
        grid = assemble_grid(_frame(), [], records)
        self.assertListEqual(grid[3:], [[], [], ["CANTIDAD"]])


if __name__ == "__main__":
    unittest.main()
