import os
import json
import logging
from dataclasses import replace

from PyQt6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                             QLabel, QPushButton, QFileDialog, QGroupBox, QGridLayout,
                             QDoubleSpinBox, QComboBox, QButtonGroup, QStackedWidget,
                             QScrollArea, QFrame, QMessageBox)
from PyQt6.QtCore import QRectF, QSettings
from PyQt6.QtGui import QPainter, QPdfWriter, QPageSize, QAction

from .constants import (APP_NAME, APP_VERSION, SETTINGS_ORG, SETTINGS_APP, PROJECT_FILTER,
                        PAPER_SIZES, COMMON_PHOTO_SIZES, CUSTOM_PRESET, PORTRAIT,
                        MODE_FIXED_BOARD, MODE_CUSTOM_BORDERS)
from .models import (MountConfig, Dimensions, oriented, toggle_orientation,
                     apply_photo_preset, apply_suggestion, to_dict, from_dict)
from .geometry import calculate
from .project import save_project, load_project, ProjectError
from .utils import UnitUtils, UNIT_MM, UNIT_INCH, UNITS
from .widgets import MountVisualizer, CollapsibleBox, MetricCard, paint_mount
from .dialogs import AdvisorDialog

logger = logging.getLogger(__name__)


class MountApp(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.resize(1280, 800)
        self.config = MountConfig()
        self.geometry_data = None
        self.unit = UNIT_INCH
        self.updating_ui = False
        self.unit_inputs = []
        self.current_project_path = None

        self.setup_menu()
        self.setup_ui()
        self.load_settings()

    # --- Settings ---

    def load_settings(self):
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        unit = settings.value("unit", UNIT_INCH)
        self.unit = unit if unit in UNITS else UNIT_INCH
        raw = settings.value("default_config")
        if raw:
            try:
                self.config = from_dict(json.loads(raw))
            except (TypeError, ValueError) as e:
                logger.warning("Ignoring unreadable default config: %s", e)
        self.refresh_inputs()
        self.recalc()

    def closeEvent(self, event):
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        settings.setValue("unit", self.unit)
        super().closeEvent(event)

    def save_as_defaults(self):
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        settings.setValue("default_config", json.dumps(to_dict(self.config)))
        settings.setValue("unit", self.unit)
        QMessageBox.information(self, "Defaults Saved", "Current settings have been saved as defaults for new sessions.")

    # --- Menus ---

    def setup_menu(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")
        act_new = QAction("New Project", self); act_new.setShortcut("Ctrl+N"); act_new.triggered.connect(self.new_project)
        act_open = QAction("Open Project...", self); act_open.setShortcut("Ctrl+O"); act_open.triggered.connect(self.open_project)
        act_save = QAction("Save Project", self); act_save.setShortcut("Ctrl+S"); act_save.triggered.connect(self.save_project)
        act_save_as = QAction("Save Project As...", self); act_save_as.setShortcut("Ctrl+Shift+S"); act_save_as.triggered.connect(self.save_project_as)
        act_pdf = QAction("Export Mount Blueprint (PDF)...", self); act_pdf.setShortcut("Ctrl+E"); act_pdf.triggered.connect(self.export_pdf)
        act_exit = QAction("Exit", self); act_exit.setShortcut("Ctrl+Q"); act_exit.triggered.connect(self.close)

        self.menu_recent = file_menu.addMenu("Recent Projects")
        self.update_recent_menu()

        file_menu.addAction(act_new)
        file_menu.addAction(act_open)
        file_menu.addMenu(self.menu_recent)
        file_menu.addSeparator()
        file_menu.addAction(act_save)
        file_menu.addAction(act_save_as)
        file_menu.addAction(act_pdf)
        file_menu.addSeparator()
        file_menu.addAction(act_exit)

        pref_menu = menubar.addMenu("Preferences")
        act_toggle_units = QAction("Toggle Units (In/MM)", self); act_toggle_units.triggered.connect(self.toggle_units_menu)
        pref_menu.addAction(act_toggle_units)
        act_save_defaults = QAction("Save Current as Default", self); act_save_defaults.triggered.connect(self.save_as_defaults)
        pref_menu.addAction(act_save_defaults)

        help_menu = menubar.addMenu("Help")
        act_about = QAction("About", self); act_about.triggered.connect(self.open_about)
        help_menu.addAction(act_about)

    def open_about(self):
        QMessageBox.about(self, f"About {APP_NAME}",
                          f"<b>{APP_NAME} v{APP_VERSION}</b><br>"
                          "Mount board and aperture calculator for picture framing.")

    # --- Projects ---

    def new_project(self):
        self.current_project_path = None
        self.config = MountConfig()
        self.refresh_inputs(); self.recalc()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION} - New Project")

    def save_project(self):
        if not self.current_project_path: self.save_project_as()
        else: self._do_save(self.current_project_path)

    def save_project_as(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save Project", "", PROJECT_FILTER)
        if path and self._do_save(path):
            self.current_project_path = path
            self.add_recent_project(path)
            self.setWindowTitle(f"{APP_NAME} v{APP_VERSION} - {os.path.basename(path)}")

    def _do_save(self, path):
        try:
            save_project(path, self.config, self.unit)
        except ProjectError as e:
            QMessageBox.critical(self, "Save Error", str(e)); return False
        return True

    def open_project(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Project", "", PROJECT_FILTER)
        if path: self.load_project(path)

    def load_project(self, path):
        try:
            self.config, self.unit = load_project(path)
        except ProjectError as e:
            QMessageBox.critical(self, "Load Error", str(e)); return
        self.current_project_path = path
        self.add_recent_project(path)
        self.refresh_inputs(); self.recalc()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION} - {os.path.basename(path)}")

    def add_recent_project(self, path):
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        recent = self.recent_projects(settings)
        if path in recent: recent.remove(path)
        recent.insert(0, path)
        settings.setValue("recent_projects", recent[:5])
        self.update_recent_menu()

    def recent_projects(self, settings):
        recent = settings.value("recent_projects", []) or []
        # A one-item list comes back as a plain string from some backends
        return [recent] if isinstance(recent, str) else list(recent)

    def update_recent_menu(self):
        self.menu_recent.clear()
        settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        for p in self.recent_projects(settings):
            if os.path.exists(p):
                a = QAction(os.path.basename(p), self)
                a.triggered.connect(lambda checked, p=p: self.load_project(p))
                self.menu_recent.addAction(a)

    # --- Layout ---

    def setup_ui(self):
        central = QWidget(); self.setCentralWidget(central)
        main_v_layout = QVBoxLayout(central); main_v_layout.setSpacing(10); main_v_layout.setContentsMargins(10, 10, 10, 10)

        self.setup_header(main_v_layout)

        workspace_layout = QHBoxLayout(); workspace_layout.setSpacing(15)
        main_v_layout.addLayout(workspace_layout)

        scroll_area = QScrollArea(); scroll_area.setWidgetResizable(True); scroll_area.setFrameShape(QFrame.Shape.NoFrame)
        scroll_area.setFixedWidth(360)
        self.controls = QWidget()
        self.c_layout = QVBoxLayout(self.controls); self.c_layout.setSpacing(6); self.c_layout.setContentsMargins(5, 5, 5, 5)
        self.setup_controls_content()
        scroll_area.setWidget(self.controls)
        workspace_layout.addWidget(scroll_area)

        self.setup_visualization_area(workspace_layout)

    def setup_header(self, parent_layout):
        header = QFrame()
        header.setStyleSheet("QFrame { background-color: #2d2d2d; border-radius: 6px; }")
        layout = QHBoxLayout(header); layout.setContentsMargins(15, 8, 15, 8); layout.setSpacing(15)

        title = QLabel(f"<b>{APP_NAME}</b>"); title.setMinimumWidth(150)
        layout.addWidget(title)
        layout.addStretch()

        self.btn_orientation = QPushButton("Portrait"); self.btn_orientation.setToolTip("Rotate Orientation")
        self.btn_orientation.clicked.connect(self.on_toggle_orientation)
        layout.addWidget(self.btn_orientation)

        self.btn_mm = QPushButton("MM"); self.btn_in = QPushButton("IN")
        grp = QButtonGroup(self)
        for b in (self.btn_mm, self.btn_in):
            b.setCheckable(True); b.setFixedWidth(44); grp.addButton(b); layout.addWidget(b)
        self.btn_mm.clicked.connect(lambda: self.convert_to_unit(UNIT_MM))
        self.btn_in.clicked.connect(lambda: self.convert_to_unit(UNIT_INCH))

        btn_pdf = QPushButton("Export Mount Blueprint (PDF)")
        btn_pdf.setStyleSheet("background-color: #d83b01; font-weight: bold; padding: 6px 12px; border-radius: 4px; color: white;")
        btn_pdf.clicked.connect(self.export_pdf)
        layout.addWidget(btn_pdf)

        parent_layout.addWidget(header)

    def setup_controls_content(self):
        # 1. Photo
        self.group_photo = CollapsibleBox("Photo Dimensions")
        l_photo = QVBoxLayout(); l_photo.setSpacing(8)

        gl_p = QGridLayout(); gl_p.setSpacing(4)
        self.combo_photo_preset = QComboBox(); self.combo_photo_preset.addItem("Custom", None)
        for s in COMMON_PHOTO_SIZES: self.combo_photo_preset.addItem(s.name, s)
        self.combo_photo_preset.currentIndexChanged.connect(self.on_photo_preset_selected)
        gl_p.addWidget(QLabel("Preset Size:"), 0, 0); gl_p.addWidget(self.combo_photo_preset, 0, 1)
        self.spin_pw = self._add_spin(gl_p, 1, "Width:")
        self.spin_ph = self._add_spin(gl_p, 2, "Height:")
        self.spin_photo_border = self._add_spin(gl_p, 3, "Photo Border (White):")
        self.spin_underlap = self._add_spin(gl_p, 4, "Underlap (Hidden):")
        l_photo.addLayout(gl_p)
        self.lbl_aperture = QLabel(""); self.lbl_aperture.setStyleSheet("color: #888; font-size: 10px;")
        l_photo.addWidget(self.lbl_aperture)

        self.group_photo.set_content_layout(l_photo)
        self.c_layout.addWidget(self.group_photo)

        # 2. Mount
        self.group_mount = CollapsibleBox("Mount Configuration")
        l_mount = QVBoxLayout(); l_mount.setSpacing(8)

        h_mode = QHBoxLayout()
        self.btn_mode_board = QPushButton("Fit to Board"); self.btn_mode_borders = QPushButton("Set Borders")
        self.mode_group = QButtonGroup(self)
        for b in (self.btn_mode_board, self.btn_mode_borders):
            b.setCheckable(True); self.mode_group.addButton(b); h_mode.addWidget(b)
        self.btn_mode_board.clicked.connect(lambda: self.set_mode(MODE_FIXED_BOARD))
        self.btn_mode_borders.clicked.connect(lambda: self.set_mode(MODE_CUSTOM_BORDERS))
        l_mount.addLayout(h_mode)

        self.stack_mode = QStackedWidget()

        # Fixed board page
        page_board = QWidget(); l_board = QVBoxLayout(page_board); l_board.setContentsMargins(0, 0, 0, 0)
        self.gb_board = QGroupBox("Board Size"); gl_b = QGridLayout(); gl_b.setSpacing(4)
        self.combo_board = QComboBox(); self.combo_board.currentIndexChanged.connect(self.on_board_preset_selected)
        gl_b.addWidget(self.combo_board, 0, 0, 1, 2)
        self.lbl_board_w = QLabel("Board Width:"); self.lbl_board_h = QLabel("Board Height:")
        self.spin_bw = self._create_spin(); self.spin_bh = self._create_spin()
        gl_b.addWidget(self.lbl_board_w, 1, 0); gl_b.addWidget(self.spin_bw, 1, 1)
        gl_b.addWidget(self.lbl_board_h, 2, 0); gl_b.addWidget(self.spin_bh, 2, 1)
        self.gb_board.setLayout(gl_b); l_board.addWidget(self.gb_board)

        gb_offset = QGroupBox("Vertical Offset (Upwards)"); l_off = QVBoxLayout()
        self.spin_offset = self._create_spin(minimum=-99999)
        l_off.addWidget(self.spin_offset)
        hint = QLabel("Positive value moves aperture UP (bottom weighted)."); hint.setStyleSheet("color: #888; font-size: 10px;")
        l_off.addWidget(hint)
        gb_offset.setLayout(l_off); l_board.addWidget(gb_offset)

        self.lbl_result_borders = QLabel(""); self.lbl_result_borders.setStyleSheet("background: #2b2b2b; padding: 6px; border-radius: 4px;")
        l_board.addWidget(self.lbl_result_borders)
        self.stack_mode.addWidget(page_board)

        # Custom borders page
        page_borders = QWidget(); l_borders = QVBoxLayout(page_borders); l_borders.setContentsMargins(0, 0, 0, 0)
        info = QLabel("Define border widths manually. Board size will adjust."); info.setWordWrap(True)
        l_borders.addWidget(info)
        gl_md = QGridLayout(); gl_md.setSpacing(4)
        self.spin_mat_t = self._add_spin(gl_md, 0, "Top:")
        self.spin_mat_b = self._add_spin(gl_md, 1, "Bottom:")
        self.spin_mat_l = self._add_spin(gl_md, 2, "Left:")
        self.spin_mat_r = self._add_spin(gl_md, 3, "Right:")
        l_borders.addLayout(gl_md)
        self.lbl_total_board = QLabel(""); self.lbl_total_board.setStyleSheet("background: #2b2b2b; padding: 6px; border-radius: 4px;")
        l_borders.addWidget(self.lbl_total_board)
        l_borders.addStretch()
        self.stack_mode.addWidget(page_borders)

        l_mount.addWidget(self.stack_mode)
        self.group_mount.set_content_layout(l_mount)
        self.c_layout.addWidget(self.group_mount)

        # 3. Advisor
        btn_advisor = QPushButton("AI Design Advisor...")
        btn_advisor.setStyleSheet("background-color: #7c3aed; color: white; font-weight: bold; padding: 6px;")
        btn_advisor.clicked.connect(self.open_advisor)
        self.c_layout.addWidget(btn_advisor)

        self.c_layout.addStretch()

    def _create_spin(self, minimum=0):
        s = QDoubleSpinBox(); s.setRange(minimum, 99999); s.setDecimals(3)
        s.setSingleStep(0.125)  # 1/8"
        s.valueChanged.connect(self.on_input_changed)
        self.unit_inputs.append(s); return s

    def _add_spin(self, layout, row, label):
        s = self._create_spin()
        layout.addWidget(QLabel(label), row, 0); layout.addWidget(s, row, 1)
        return s

    def setup_visualization_area(self, parent_layout):
        res_wid = QWidget(); res_l = QVBoxLayout(res_wid); res_l.setContentsMargins(0, 0, 0, 0)
        self.preview = MountVisualizer(); res_l.addWidget(self.preview, 1)

        h_cards = QHBoxLayout()
        self.card_board = MetricCard("Board Dimensions")
        self.card_aperture = MetricCard("Aperture Cut")
        self.card_paper = MetricCard("Required Paper")
        for c in (self.card_board, self.card_aperture, self.card_paper): h_cards.addWidget(c)
        res_l.addLayout(h_cards)

        parent_layout.addWidget(res_wid, 1)

    # --- State <-> widgets ---

    def refresh_inputs(self):
        """Pushes the config into the widgets, in the current display unit."""
        self.updating_ui = True
        c, u = self.config, self.unit
        step = 2.0 if u == UNIT_MM else 0.125
        for s in self.unit_inputs: s.setSingleStep(step); s.setSuffix(" mm" if u == UNIT_MM else " in")
        pairs = [(self.spin_pw, c.photo_width), (self.spin_ph, c.photo_height),
                 (self.spin_photo_border, c.photo_border), (self.spin_underlap, c.underlap),
                 (self.spin_bw, c.custom_board.width), (self.spin_bh, c.custom_board.height),
                 (self.spin_offset, c.mount_offset),
                 (self.spin_mat_t, c.manual_borders.top), (self.spin_mat_b, c.manual_borders.bottom),
                 (self.spin_mat_l, c.manual_borders.left), (self.spin_mat_r, c.manual_borders.right)]
        for spin, mm in pairs: spin.setValue(UnitUtils.to_display(mm, u))

        self.btn_mm.setChecked(u == UNIT_MM); self.btn_in.setChecked(u == UNIT_INCH)
        self.btn_orientation.setText("Portrait" if c.orientation == PORTRAIT else "Landscape")
        fixed = c.mode == MODE_FIXED_BOARD
        self.btn_mode_board.setChecked(fixed); self.btn_mode_borders.setChecked(not fixed)
        self.stack_mode.setCurrentIndex(0 if fixed else 1)
        self.refresh_board_combo()
        self.updating_ui = False

    def refresh_board_combo(self):
        self.combo_board.blockSignals(True)
        self.combo_board.clear()
        for s in PAPER_SIZES:
            w, h = oriented(s, self.config.orientation)
            w_d, h_d = round(UnitUtils.to_display(w, self.unit)), round(UnitUtils.to_display(h, self.unit))
            self.combo_board.addItem(f"{s.name} ({w_d} x {h_d})", s.name)
        self.combo_board.addItem("Custom Dimensions", CUSTOM_PRESET)
        idx = self.combo_board.findData(self.config.board_preset)
        self.combo_board.setCurrentIndex(idx)
        self.combo_board.blockSignals(False)
        custom = self.config.board_preset == CUSTOM_PRESET
        for w in (self.lbl_board_w, self.lbl_board_h, self.spin_bw, self.spin_bh): w.setVisible(custom)

    def read_input(self, spin):
        """Returns the config with the one field edited through ``spin`` replaced, in mm."""
        c, val = self.config, UnitUtils.from_display(spin.value(), self.unit)
        fields = {self.spin_pw: "photo_width", self.spin_ph: "photo_height",
                  self.spin_photo_border: "photo_border", self.spin_underlap: "underlap",
                  self.spin_offset: "mount_offset"}
        if spin in fields: return c.update(**{fields[spin]: val})
        if spin is self.spin_bw: return c.update(custom_board=Dimensions(val, c.custom_board.height))
        if spin is self.spin_bh: return c.update(custom_board=Dimensions(c.custom_board.width, val))
        sides = {self.spin_mat_t: "top", self.spin_mat_b: "bottom", self.spin_mat_l: "left", self.spin_mat_r: "right"}
        return c.update(manual_borders=replace(c.manual_borders, **{sides[spin]: val}))

    # --- Handlers ---

    def on_input_changed(self):
        if self.updating_ui: return
        self.config = self.read_input(self.sender())
        self.recalc()

    def on_photo_preset_selected(self, index):
        size = self.combo_photo_preset.itemData(index)
        if self.updating_ui or size is None: return
        self.config = apply_photo_preset(self.config, size)
        self.refresh_inputs(); self.recalc()

    def on_board_preset_selected(self, index):
        name = self.combo_board.itemData(index)
        if self.updating_ui or name is None: return
        self.config = self.config.update(board_preset=name)
        self.refresh_board_combo(); self.recalc()

    def set_mode(self, mode):
        if mode == self.config.mode: return
        self.config = self.config.update(mode=mode)
        self.stack_mode.setCurrentIndex(0 if mode == MODE_FIXED_BOARD else 1)
        self.recalc()

    def on_toggle_orientation(self):
        self.config = toggle_orientation(self.config)
        self.refresh_inputs(); self.recalc()

    def toggle_units_menu(self):
        self.convert_to_unit(UNIT_MM if self.unit == UNIT_INCH else UNIT_INCH)

    def convert_to_unit(self, target):
        if target == self.unit: return
        # Stored values are mm; only the display changes
        self.unit = target
        self.refresh_inputs(); self.recalc()

    def open_advisor(self):
        dlg = AdvisorDialog(self.config, self.unit, self)
        dlg.suggestionApplied.connect(self.on_suggestion)
        dlg.exec()

    def on_suggestion(self, suggested):
        self.config = apply_suggestion(self.config, suggested)
        logger.info("Applied advisor suggestion")
        self.refresh_inputs(); self.recalc()

    def recalc(self):
        if self.updating_ui: return
        geo = calculate(self.config)
        self.geometry_data = geo
        u = self.unit

        self.lbl_aperture.setText(f"Aperture Size: {UnitUtils.format_size(geo.aperture_size, u)}")
        b = geo.borders
        self.lbl_result_borders.setText(
            f"<b>Resulting Borders:</b><br>"
            f"Top: {UnitUtils.to_display(b.top, u)} | Bottom: {UnitUtils.to_display(b.bottom, u)}<br>"
            f"Sides: {UnitUtils.to_display(b.left, u)}")
        self.lbl_total_board.setText(f"Total Board: {UnitUtils.format_size(geo.board_size, u)}")

        self.preview.update_geometry(geo, u)
        self.card_board.update_metrics(geo.board_size, u)
        self.card_aperture.update_metrics(geo.aperture_size, u)
        self.card_paper.update_metrics(geo.required_paper, u, prefix="> ")

    # --- Export ---

    def export_pdf(self):
        if not self.geometry_data: return
        fn, _ = QFileDialog.getSaveFileName(self, "Save PDF", "Mount_Blueprint.pdf", "PDF Files (*.pdf)")
        if not fn: return
        geo, u = self.geometry_data, self.unit
        writer = QPdfWriter(fn); writer.setPageSize(QPageSize(QPageSize.PageSizeId.A4))
        writer.setResolution(300)
        painter = QPainter(writer)

        font = painter.font(); font.setPointSize(14); font.setBold(True); painter.setFont(font)
        painter.drawText(100, 150, "MOUNT BLUEPRINT")
        font.setPointSize(10); font.setBold(False); painter.setFont(font)
        b = geo.borders
        y = 300; h = 60
        for l in [f"BOARD: {UnitUtils.format_dual(geo.board_size.width, u)} x {UnitUtils.format_dual(geo.board_size.height, u)}",
                  f"APERTURE: {UnitUtils.format_dual(geo.aperture_size.width, u)} x {UnitUtils.format_dual(geo.aperture_size.height, u)}",
                  f"REQUIRED PAPER: {UnitUtils.format_dual(geo.required_paper.width, u)} x {UnitUtils.format_dual(geo.required_paper.height, u)}",
                  f"TOP: {UnitUtils.format_dual(b.top, u)}    BOTTOM: {UnitUtils.format_dual(b.bottom, u)}",
                  f"LEFT: {UnitUtils.format_dual(b.left, u)}    RIGHT: {UnitUtils.format_dual(b.right, u)}",
                  f"PHOTO BORDER: {UnitUtils.format_dual(geo.photo_border, u)}    UNDERLAP: {UnitUtils.format_dual(geo.underlap, u)}"]:
            painter.drawText(100, int(y), l); y += h

        area = QRectF(100, y + 100, writer.width() - 200, writer.height() - y - 300)
        paint_mount(painter, area, geo, u, font_px=36)
        painter.end()
        logger.info("Exported blueprint to %s", fn)
        QMessageBox.information(self, "Export Complete", f"Blueprint saved to: {fn}")
