from io import BytesIO
from typing import Any, Dict, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter


def _create_styles():
    thin = Side(style="thin", color="000000")
    return {
        "title_font": Font(bold=True, size=14),
        "section_font": Font(bold=True, size=11),
        "header_font": Font(bold=True, size=10),
        "header_fill": PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid"),
        "warning_fill": PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid"),
        "border": Border(left=thin, right=thin, top=thin, bottom=thin),
        "center": Alignment(horizontal="center", vertical="center"),
        "left": Alignment(horizontal="left", vertical="top", wrap_text=True),
    }


def _write_row(ws, row: int, values: List[Any], styles: dict, alignments: Optional[List[str]] = None, header: bool = False):
    """Write one bordered table row; header rows are bold, filled and centered."""
    for col_idx, value in enumerate(values, start=1):
        cell = ws.cell(row=row, column=col_idx, value=value)
        cell.border = styles["border"]
        if header:
            cell.font = styles["header_font"]
            cell.fill = styles["header_fill"]
            cell.alignment = styles["center"]
        elif alignments:
            cell.alignment = styles[alignments[col_idx - 1]]


def _set_column_widths(ws, widths: List[int]):
    for col_idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def format_spec_details(spec_details: List[Dict[str, Any]]) -> str:
    """Stack spec lines as ``size value unit`` text, one per line."""
    lines = []
    for spec in spec_details or []:
        parts = [str(spec.get(key) or "").strip() for key in ("size", "spec_value", "spec_unit")]
        lines.append(" ".join(part for part in parts if part))
    return "\n".join(lines)


def build_bom_sheet_excel(sheet: Dict[str, Any]) -> BytesIO:
    """Generate the BOM sheet of one color variant."""
    wb = Workbook()
    ws = wb.active
    ws.title = "配料明细"
    styles = _create_styles()

    style = sheet.get("style") or {}
    variant = sheet.get("variant", {})
    bom_items = sheet.get("bom_items", [])

    current_row = 1

    ws.cell(row=current_row, column=1, value="配料明细表").font = styles["title_font"]
    ws.merge_cells(start_row=current_row, start_column=1, end_row=current_row, end_column=6)
    current_row += 2

    header_info = [
        ("款号:", style.get("style_no", "-")),
        ("款式名称:", style.get("style_name", "-")),
        ("颜色:", variant.get("color_name", "-")),
        ("尺码范围:", variant.get("size_range") or "-"),
        ("配料数量:", len(bom_items)),
    ]
    for label, value in header_info:
        ws.cell(row=current_row, column=1, value=label).font = Font(bold=True)
        ws.cell(row=current_row, column=2, value=value)
        current_row += 1

    if not sheet.get("style"):
        current_row += 1
        warning_cell = ws.cell(row=current_row, column=1, value="⚠ 所属款号已删除")
        warning_cell.fill = styles["warning_fill"]
        ws.merge_cells(start_row=current_row, start_column=1, end_row=current_row, end_column=4)

    current_row += 2

    ws.cell(row=current_row, column=1, value="配料列表").font = styles["section_font"]
    current_row += 1

    columns = ["物料名称", "物料颜色", "部位", "单位", "供应商", "规格明细"]
    _write_row(ws, current_row, columns, styles, header=True)
    current_row += 1

    alignments = ["left", "left", "center", "center", "left", "left"]
    for item in bom_items:
        spec_text = format_spec_details(item.get("specDetails"))
        row_values = [
            item.get("material_name", "-"),
            item.get("material_color_text") or "-",
            item.get("usage") or "-",
            item.get("unit") or "-",
            item.get("supplier") or "-",
            spec_text or "无规格",
        ]
        _write_row(ws, current_row, row_values, styles, alignments)
        if not spec_text:
            ws.cell(row=current_row, column=6).fill = styles["warning_fill"]
        current_row += 1

    _set_column_widths(ws, [24, 14, 12, 8, 16, 28])

    stream = BytesIO()
    wb.save(stream)
    stream.seek(0)
    return stream
