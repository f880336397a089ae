from .constants import MM_PER_INCH

UNIT_MM = "mm"
UNIT_INCH = "inch"
UNITS = (UNIT_MM, UNIT_INCH)


def get_fit_metrics(view_w, view_h, content_w, content_h):
    """Calculates scale to fit content within a view while maintaining aspect ratio."""
    if content_w <= 0 or content_h <= 0: return 0
    return min(view_w / content_w, view_h / content_h) * 0.95


class UnitUtils:
    @staticmethod
    def to_mm(val_in): return val_in * MM_PER_INCH
    @staticmethod
    def from_mm(val_mm): return val_mm / MM_PER_INCH

    @staticmethod
    def to_display(mm, unit, precision=3):
        val = mm / MM_PER_INCH if unit == UNIT_INCH else mm
        return round(val, precision)

    @staticmethod
    def from_display(val, unit):
        return val * MM_PER_INCH if unit == UNIT_INCH else val

    @staticmethod
    def suffix(unit): return '"' if unit == UNIT_INCH else "mm"

    @staticmethod
    def format_length(mm, unit):
        """Short label used on the diagram."""
        return f"{mm / MM_PER_INCH:.2f}\"" if unit == UNIT_INCH else f"{round(mm)}mm"

    @staticmethod
    def format_dual(mm, unit):
        val_in = mm / MM_PER_INCH
        return f"{val_in:.3f}\" ({mm:.1f}mm)" if unit == UNIT_INCH else f"{mm:.1f}mm ({val_in:.3f}\")"

    @staticmethod
    def format_size(dims, unit):
        return f"{UnitUtils.to_display(dims.width, unit)} x {UnitUtils.to_display(dims.height, unit)} {UnitUtils.suffix(unit)}"
