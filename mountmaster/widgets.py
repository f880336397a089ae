from PyQt6.QtWidgets import QLabel, QSizePolicy, QWidget, QVBoxLayout, QToolButton, QFrame
from PyQt6.QtCore import Qt, QRectF, QPointF
from PyQt6.QtGui import QPixmap, QPainter, QColor, QPen, QPolygonF, QFont

from .constants import (BOARD_COLOR, BOARD_EDGE_COLOR, PAPER_EDGE_COLOR, APERTURE_EDGE_COLOR,
                        IMAGE_COLOR, IMAGE_EDGE_COLOR, LABEL_COLOR, ARROW_COLOR)
from .utils import get_fit_metrics, UnitUtils

LABEL_MIN_MARGIN = 20  # mm; border labels are skipped on thinner margins


def draw_arrow(p, tip, direction, size=8):
    s = size; a = QPolygonF([tip])
    if direction == "left": a.append(tip+QPointF(s,-s/3)); a.append(tip+QPointF(s,s/3))
    elif direction == "right": a.append(tip+QPointF(-s,-s/3)); a.append(tip+QPointF(-s,s/3))
    elif direction == "up": a.append(tip+QPointF(-s/3,s)); a.append(tip+QPointF(s/3,s))
    elif direction == "down": a.append(tip+QPointF(-s/3,-s)); a.append(tip+QPointF(s/3,-s))
    p.setBrush(QColor(ARROW_COLOR)); p.drawPolygon(a)


def paint_mount(p, target, geo, unit, board_color=BOARD_COLOR, font_px=12):
    """
    Paints the mount diagram for ``geo`` scaled to fit ``target``.

    Layers, back to front: board, hidden photo paper (dashed), aperture,
    printed image with a centre crosshair, then dimension arrows and border
    labels. Returns False when the board has no area to draw.
    """
    board = geo.board_size
    if board.width <= 0 or board.height <= 0: return False

    pad = max(board.width, board.height) * 0.1
    scale = get_fit_metrics(target.width(), target.height(), board.width + 2*pad, board.height + 2*pad)
    if scale == 0: return False
    ox = target.x() + (target.width() - board.width*scale) / 2
    oy = target.y() + (target.height() - board.height*scale) / 2

    def to_px(r): return QRectF(ox + r.x*scale, oy + r.y*scale, r.width*scale, r.height*scale)

    p.save()
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    board_rect = QRectF(ox, oy, board.width*scale, board.height*scale)

    # Drop shadow
    p.setPen(Qt.PenStyle.NoPen); p.setBrush(QColor(0, 0, 0, 60))
    p.drawRect(board_rect.translated(3, 3))
    p.setPen(QPen(QColor(BOARD_EDGE_COLOR), 1)); p.setBrush(QColor(board_color))
    p.drawRect(board_rect)

    pen_paper = QPen(QColor(PAPER_EDGE_COLOR), 1, Qt.PenStyle.DashLine)
    p.setPen(pen_paper); p.setBrush(QColor(255, 255, 255))
    p.drawRect(to_px(geo.paper_rect))

    p.setPen(QPen(QColor(APERTURE_EDGE_COLOR), 0.5)); p.setBrush(QColor(255, 255, 255))
    p.drawRect(to_px(geo.aperture_rect))

    img = to_px(geo.image_rect)
    fill = QColor(IMAGE_COLOR); fill.setAlphaF(0.2)
    p.setPen(QPen(QColor(IMAGE_EDGE_COLOR), 1)); p.setBrush(fill)
    p.drawRect(img)
    cross = QColor(IMAGE_EDGE_COLOR); cross.setAlphaF(0.5)
    p.setPen(QPen(cross, 0.5)); c = img.center()
    p.drawLine(QPointF(c.x() - 10, c.y()), QPointF(c.x() + 10, c.y()))
    p.drawLine(QPointF(c.x(), c.y() - 10), QPointF(c.x(), c.y() + 10))

    # Board dimensions
    p.setFont(QFont(p.font().family())); f = p.font(); f.setPixelSize(font_px); p.setFont(f)
    gap = pad * scale / 2
    y_line = board_rect.top() - gap
    p.setPen(QPen(QColor(ARROW_COLOR), 1))
    p.drawLine(QPointF(board_rect.left(), y_line), QPointF(board_rect.right(), y_line))
    draw_arrow(p, QPointF(board_rect.left(), y_line), "left"); draw_arrow(p, QPointF(board_rect.right(), y_line), "right")
    p.setPen(QColor(LABEL_COLOR))
    p.drawText(QRectF(board_rect.left(), y_line - font_px*2, board_rect.width(), font_px*2 - 2),
               Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignBottom,
               f"Board: {UnitUtils.format_length(board.width, unit)}")

    x_line = board_rect.left() - gap
    p.setPen(QPen(QColor(ARROW_COLOR), 1))
    p.drawLine(QPointF(x_line, board_rect.top()), QPointF(x_line, board_rect.bottom()))
    draw_arrow(p, QPointF(x_line, board_rect.top()), "up"); draw_arrow(p, QPointF(x_line, board_rect.bottom()), "down")
    p.setPen(QColor(LABEL_COLOR))
    p.save(); p.translate(x_line - 4, board_rect.center().y()); p.rotate(-90)
    p.drawText(QRectF(-board_rect.height()/2, -font_px*2, board_rect.height(), font_px*2 - 2),
               Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignBottom,
               f"Board: {UnitUtils.format_length(board.height, unit)}")
    p.restore()

    # Border labels
    borders = geo.borders
    f.setPixelSize(max(8, font_px - 2)); p.setFont(f)
    if borders.top > LABEL_MIN_MARGIN:
        p.drawText(QRectF(board_rect.left(), oy, board_rect.width(), borders.top*scale),
                   Qt.AlignmentFlag.AlignCenter, f"Top: {UnitUtils.format_length(borders.top, unit)}")
    if borders.bottom > LABEL_MIN_MARGIN:
        bottom_y = oy + (geo.aperture_position.y + geo.aperture_size.height) * scale
        p.drawText(QRectF(board_rect.left(), bottom_y, board_rect.width(), borders.bottom*scale),
                   Qt.AlignmentFlag.AlignCenter, f"Bottom: {UnitUtils.format_length(borders.bottom, unit)}")
    p.restore()
    return True


def paint_legend(p, corner, font_px=11):
    entries = [
        ("Mount Board", QColor(BOARD_COLOR), QPen(QColor(PAPER_EDGE_COLOR), 1)),
        ("Aperture (White Border)", QColor(255, 255, 255), QPen(QColor(APERTURE_EDGE_COLOR), 1)),
        ("Image", QColor(219, 234, 254), QPen(QColor(IMAGE_COLOR), 1)),
        ("Photo Paper (Underlap)", QColor(0, 0, 0, 0), QPen(QColor(PAPER_EDGE_COLOR), 1, Qt.PenStyle.DashLine)),
    ]
    row_h = font_px + 6; w, h = 170, row_h * len(entries) + 8
    box = QRectF(corner.x() - w, corner.y() - h, w, h)
    p.save()
    p.setPen(Qt.PenStyle.NoPen); p.setBrush(QColor(255, 255, 255, 230)); p.drawRoundedRect(box, 4, 4)
    f = p.font(); f.setPixelSize(font_px); p.setFont(f)
    for i, (label, fill, pen) in enumerate(entries):
        y = box.top() + 4 + i*row_h
        p.setPen(pen); p.setBrush(fill); p.drawRect(QRectF(box.left() + 8, y + 3, 10, 10))
        p.setPen(QColor(LABEL_COLOR)); p.drawText(QPointF(box.left() + 26, y + font_px + 1), label)
    p.restore()


class MountVisualizer(QLabel):
    def __init__(self):
        super().__init__()
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setStyleSheet("border: 1px solid #444; background-color: #F9FAFB;")
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(200, 200)
        self.geometry_data = None
        self.unit = "inch"

    def update_geometry(self, geo, unit):
        self.geometry_data = geo; self.unit = unit; self.refresh_render()

    def refresh_render(self):
        if self.geometry_data is None:
            self.setText("No Mount"); return
        w, h = self.width() - 4, self.height() - 4
        if w <= 0 or h <= 0: return

        final = QPixmap(w, h)
        final.fill(QColor("#F9FAFB"))
        painter = QPainter(final)
        ok = paint_mount(painter, QRectF(0, 0, w, h), self.geometry_data, self.unit)
        if ok:
            paint_legend(painter, QPointF(w - 10, h - 10))
        else:
            painter.setPen(QColor(LABEL_COLOR))
            painter.drawText(QRectF(0, 0, w, h), Qt.AlignmentFlag.AlignCenter, "Board has no area")
        painter.end()
        self.setPixmap(final)

    def resizeEvent(self, event): self.refresh_render(); super().resizeEvent(event)


class CollapsibleBox(QWidget):
    def __init__(self, title="", parent=None):
        super().__init__(parent)

        self.toggle_button = QToolButton(text=title, checkable=True, checked=True)
        self.toggle_button.setStyleSheet("QToolButton { border: none; font-weight: bold; background-color: #333; padding: 5px; }")
        self.toggle_button.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        self.toggle_button.setArrowType(Qt.ArrowType.DownArrow)
        self.toggle_button.toggled.connect(self.on_toggled)

        self.content_area = QWidget()

        self.main_layout = QVBoxLayout(self)
        self.main_layout.setSpacing(0)
        self.main_layout.setContentsMargins(0, 0, 0, 0)
        self.main_layout.addWidget(self.toggle_button)
        self.main_layout.addWidget(self.content_area)

    def on_toggled(self, checked):
        self.toggle_button.setArrowType(Qt.ArrowType.DownArrow if checked else Qt.ArrowType.RightArrow)
        self.content_area.setVisible(checked)
        if self.parentWidget(): self.parentWidget().adjustSize()

    def set_content_layout(self, layout):
        self.content_area.setLayout(layout)


class MetricCard(QFrame):
    def __init__(self, title, parent=None):
        super().__init__(parent)
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setFrameShadow(QFrame.Shadow.Raised)
        self.setStyleSheet("""
            QFrame {
                background-color: #2b2b2b;
                border: 1px solid #444;
                border-radius: 8px;
                padding: 8px;
            }
            QLabel { color: #ddd; border: none; }
            QLabel.title { font-size: 11px; font-weight: bold; color: #aaa; }
            QLabel.primary { font-size: 16px; font-weight: bold; color: #4facfe; }
            QLabel.detail { font-size: 10px; color: #888; }
        """)

        layout = QVBoxLayout(self)
        layout.setSpacing(4)

        self.lbl_title = QLabel(title.upper())
        self.lbl_title.setProperty("class", "title")
        layout.addWidget(self.lbl_title)

        self.lbl_primary = QLabel("-- x --")
        self.lbl_primary.setWordWrap(True)
        self.lbl_primary.setProperty("class", "primary")
        layout.addWidget(self.lbl_primary)

        self.lbl_detail = QLabel("")
        self.lbl_detail.setProperty("class", "detail")
        layout.addWidget(self.lbl_detail)

    def update_metrics(self, dims, unit, prefix=""):
        self.lbl_primary.setText(prefix + UnitUtils.format_size(dims, unit))
        self.lbl_detail.setText(f"{UnitUtils.format_dual(dims.width, unit)} x {UnitUtils.format_dual(dims.height, unit)}")
