import logging

from PyQt6.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QLabel,
                             QPushButton, QLineEdit, QFrame)
from PyQt6.QtCore import QThread, pyqtSignal

from .advisor import MountAdvisor, AdvisorError
from .constants import ADVICE_ERROR_TEXT

logger = logging.getLogger(__name__)


class AdviceLoader(QThread):
    adviceReady = pyqtSignal(object)  # Advice
    error = pyqtSignal(str)

    def __init__(self, advisor, description, config, unit):
        super().__init__()
        self.advisor = advisor
        self.description = description
        self.config = config
        self.unit = unit

    def run(self):
        try:
            self.adviceReady.emit(self.advisor.get_mount_advice(self.description, self.config, self.unit))
        except AdvisorError as e:
            logger.warning("Advice request failed: %s", e)
            self.error.emit(str(e))


class AdvisorDialog(QDialog):
    """Asks Gemini for mount proportions; emits the suggestion when the user applies it."""
    suggestionApplied = pyqtSignal(dict)

    def __init__(self, config, unit, parent=None, advisor=None):
        super().__init__(parent)
        self.setWindowTitle("AI Design Advisor")
        self.resize(520, 320)
        self.config = config
        self.unit = unit
        self.advisor = advisor or MountAdvisor()
        self.advice = None
        self.loader = None

        layout = QVBoxLayout(self)

        h_ask = QHBoxLayout()
        self.edit_desc = QLineEdit()
        self.edit_desc.setPlaceholderText("Describe your photo (e.g. 'B&W portrait', 'Colorful sunset')...")
        self.edit_desc.textChanged.connect(self.update_buttons)
        self.edit_desc.returnPressed.connect(self.ask)
        self.btn_ask = QPushButton("Ask"); self.btn_ask.clicked.connect(self.ask)
        self.btn_ask.setStyleSheet("background-color: #7c3aed; color: white; font-weight: bold; padding: 6px 14px;")
        h_ask.addWidget(self.edit_desc); h_ask.addWidget(self.btn_ask)
        layout.addLayout(h_ask)

        self.lbl_error = QLabel(""); self.lbl_error.setStyleSheet("color: #dc2626;"); self.lbl_error.hide()
        layout.addWidget(self.lbl_error)

        self.frame_advice = QFrame()
        self.frame_advice.setStyleSheet("QFrame { background-color: #2b2b2b; border: 1px solid #5b21b6; border-radius: 6px; }")
        l_adv = QVBoxLayout(self.frame_advice)
        self.lbl_suggestion = QLabel(); self.lbl_suggestion.setWordWrap(True)
        self.lbl_suggestion.setStyleSheet("font-weight: bold; border: none;")
        self.lbl_reasoning = QLabel(); self.lbl_reasoning.setWordWrap(True)
        self.lbl_reasoning.setStyleSheet("font-style: italic; color: #aaa; border: none;")
        self.btn_apply = QPushButton("Apply Suggested Dimensions"); self.btn_apply.clicked.connect(self.apply)
        l_adv.addWidget(self.lbl_suggestion); l_adv.addWidget(self.lbl_reasoning); l_adv.addWidget(self.btn_apply)
        self.frame_advice.hide()
        layout.addWidget(self.frame_advice)
        layout.addStretch()

        h_btn = QHBoxLayout(); h_btn.addStretch()
        btn_close = QPushButton("Close"); btn_close.clicked.connect(self.reject)
        h_btn.addWidget(btn_close)
        layout.addLayout(h_btn)
        self.update_buttons()

    def update_buttons(self):
        busy = self.loader is not None and self.loader.isRunning()
        self.btn_ask.setEnabled(not busy and bool(self.edit_desc.text().strip()))
        self.btn_ask.setText("..." if busy else "Ask")

    def ask(self):
        description = self.edit_desc.text().strip()
        if not description or (self.loader and self.loader.isRunning()): return
        self.lbl_error.hide()
        self.loader = AdviceLoader(self.advisor, description, self.config, self.unit)
        self.loader.adviceReady.connect(self.on_advice)
        self.loader.error.connect(self.on_error)
        self.loader.finished.connect(self.update_buttons)
        self.loader.start()
        self.update_buttons()

    def on_advice(self, advice):
        self.advice = advice
        self.lbl_suggestion.setText(advice.suggestion)
        self.lbl_reasoning.setText(f"\"{advice.reasoning}\"")
        self.btn_apply.setVisible(bool(advice.suggested_config))
        self.frame_advice.show()
        self.update_buttons()

    def on_error(self, err_msg):
        self.lbl_error.setText(ADVICE_ERROR_TEXT)
        self.lbl_error.setToolTip(err_msg)
        self.lbl_error.show()
        self.update_buttons()

    def apply(self):
        if self.advice and self.advice.suggested_config:
            self.suggestionApplied.emit(self.advice.suggested_config)
            self.accept()

    def done(self, result):
        if self.loader and self.loader.isRunning(): self.loader.wait()
        super().done(result)
