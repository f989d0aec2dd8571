# stackr/ui/layer_panel.py
from __future__ import annotations
from typing import Dict, Optional

import qtawesome as qta

from app_config import FONT_FAMILIES
from stackr.qt import QtCore, QtGui, QtWidgets
from stackr.core.document import ComposerState, layers_top_down
from stackr.core.layers import Layer, TextLayer, VideoLayer, is_video
from stackr.ui.controller import ComposerController
from stackr.ui.theme import Theme, qcolor_hex

_BTN_CSS = (
    "QToolButton { background: transparent; border: 0; padding: 0; margin: 0; }"
    "QToolButton:checked { background: transparent; }"
    "QToolButton:focus { outline: none; }"
)


class ClickLabel(QtWidgets.QLabel):
    clicked = QtCore.Signal()

    def mousePressEvent(self, e: QtGui.QMouseEvent):
        if e.button() == QtCore.Qt.LeftButton:
            self.clicked.emit()


class LayerRow(QtWidgets.QFrame):
    """One entry of the layer list with its per-layer actions."""
    selectRequested    = QtCore.Signal(str)
    visibilityToggled  = QtCore.Signal(str, bool)
    raiseRequested     = QtCore.Signal(str)
    lowerRequested     = QtCore.Signal(str)
    duplicateRequested = QtCore.Signal(str)
    resetRequested     = QtCore.Signal(str)
    deleteRequested    = QtCore.Signal(str)

    def __init__(self, layer: Layer, selected: bool, parent=None):
        super().__init__(parent)
        self.layer_id = layer.id
        self.setFixedHeight(36)
        bg = Theme.panel_alt if selected else Theme.panel
        edge = Theme.selection if selected else Theme.stroke
        self.setStyleSheet(f"LayerRow {{ background:{bg.name()}; border:1px solid {edge.name()}; border-radius:4px; }}")

        row = QtWidgets.QHBoxLayout(self)
        row.setContentsMargins(8, 4, 8, 4)
        row.setSpacing(4)

        col = Theme.icon_idle.name()
        kind = QtWidgets.QLabel()
        kind.setPixmap(qta.icon("fa5s.video" if is_video(layer) else "fa5s.font", color=col).pixmap(14, 14))
        row.addWidget(kind)

        self.title = ClickLabel(layer.name)
        dim = "" if layer.visible else f"color:{Theme.text_dim.name()};"
        self.title.setStyleSheet(f"color:{Theme.text.name()}; font-weight:600; {dim}")
        self.title.clicked.connect(lambda: self.selectRequested.emit(self.layer_id))
        row.addWidget(self.title, 1)

        self.eye = self._button("fa5s.eye" if layer.visible else "fa5s.eye-slash", "Toggle visibility")
        self.eye.setCheckable(True)
        self.eye.setChecked(layer.visible)
        self.eye.toggled.connect(lambda v: self.visibilityToggled.emit(self.layer_id, v))

        up = self._button("fa5s.chevron-up", "Bring forward")
        up.clicked.connect(lambda: self.raiseRequested.emit(self.layer_id))
        down = self._button("fa5s.chevron-down", "Send backward")
        down.clicked.connect(lambda: self.lowerRequested.emit(self.layer_id))
        dup = self._button("fa5s.copy", "Duplicate")
        dup.clicked.connect(lambda: self.duplicateRequested.emit(self.layer_id))
        reset = self._button("fa5s.undo", "Reset")
        reset.clicked.connect(lambda: self.resetRequested.emit(self.layer_id))
        delete = self._button("fa5s.trash", "Delete", color=Theme.danger.name())
        delete.clicked.connect(lambda: self.deleteRequested.emit(self.layer_id))

        for b in (self.eye, up, down, dup, reset, delete):
            row.addWidget(b)

    def _button(self, icon: str, tip: str, color: Optional[str] = None) -> QtWidgets.QToolButton:
        b = QtWidgets.QToolButton(self)
        b.setIcon(qta.icon(icon, color=color or Theme.icon_idle.name()))
        b.setToolTip(tip)
        b.setStyleSheet(_BTN_CSS)
        b.setIconSize(QtCore.QSize(14, 14))
        b.setFixedSize(24, 24)
        b.setCursor(QtCore.Qt.PointingHandCursor)
        return b


class LayerProperties(QtWidgets.QStackedWidget):
    """Property form for the selected layer (video or text page)."""
    def __init__(self, controller: ComposerController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self._layer_id: Optional[str] = None
        self._edits: Dict[str, QtWidgets.QWidget] = {}

        self.addWidget(self._empty_page())
        self._video_page = self._build_video_page()
        self._text_page = self._build_text_page()
        self.addWidget(self._video_page)
        self.addWidget(self._text_page)

    def _empty_page(self) -> QtWidgets.QWidget:
        lbl = QtWidgets.QLabel("Select a layer to edit its properties")
        lbl.setAlignment(QtCore.Qt.AlignCenter)
        lbl.setStyleSheet("color: #aaa;")
        return lbl

    def _line(self, key: str) -> QtWidgets.QLineEdit:
        edit = QtWidgets.QLineEdit()
        edit.editingFinished.connect(lambda k=key, w=edit: self._commit(k, w.text()))
        self._edits[key] = edit
        return edit

    def _build_video_page(self) -> QtWidgets.QWidget:
        w = QtWidgets.QWidget()
        form = QtWidgets.QFormLayout(w)
        form.addRow("Name", self._line("video.name"))
        form.addRow("Width", self._line("video.width"))
        form.addRow("Height", self._line("video.height"))
        form.addRow("X", self._line("video.x"))
        form.addRow("Y", self._line("video.y"))
        lock = QtWidgets.QCheckBox("Lock aspect ratio")
        lock.toggled.connect(lambda v: self._commit_value("aspect_locked", v))
        self._edits["video.aspect_locked"] = lock
        form.addRow(lock)
        return w

    def _build_text_page(self) -> QtWidgets.QWidget:
        w = QtWidgets.QWidget()
        form = QtWidgets.QFormLayout(w)
        form.addRow("Name", self._line("text.name"))
        form.addRow("Text", self._line("text.text"))
        form.addRow("Font size", self._line("text.font_size"))

        family = QtWidgets.QComboBox()
        family.addItems(list(FONT_FAMILIES))
        family.currentTextChanged.connect(lambda v: self._commit_value("font_family", v))
        self._edits["text.font_family"] = family
        form.addRow("Font", family)

        color = QtWidgets.QToolButton()
        color.clicked.connect(self._pick_color)
        self._edits["text.color"] = color
        form.addRow("Color", color)

        bold = QtWidgets.QCheckBox("Bold")
        bold.toggled.connect(lambda v: self._commit_value("bold", v))
        italic = QtWidgets.QCheckBox("Italic")
        italic.toggled.connect(lambda v: self._commit_value("italic", v))
        self._edits["text.bold"] = bold
        self._edits["text.italic"] = italic
        style_row = QtWidgets.QHBoxLayout()
        style_row.addWidget(bold)
        style_row.addWidget(italic)
        style_row.addStretch(1)
        form.addRow("Style", style_row)

        form.addRow("X", self._line("text.x"))
        form.addRow("Y", self._line("text.y"))
        return w

    def _commit(self, key: str, raw: str) -> None:
        if self._layer_id is None:
            return
        self.controller.update_field(self._layer_id, key.split(".", 1)[1], raw)

    def _commit_value(self, name: str, value) -> None:
        if self._layer_id is None:
            return
        self.controller.update_layer(self._layer_id, **{name: value})

    def _pick_color(self) -> None:
        layer = self.controller.state.selected
        if not isinstance(layer, TextLayer):
            return
        col = QtWidgets.QColorDialog.getColor(QtGui.QColor(layer.color), self,
                                              options=QtWidgets.QColorDialog.DontUseNativeDialog)
        if col.isValid():
            self._commit_value("color", qcolor_hex(col))

    def show_layer(self, layer: Optional[Layer]) -> None:
        self._layer_id = layer.id if layer is not None else None
        for w in self._edits.values():
            w.blockSignals(True)
        try:
            if isinstance(layer, VideoLayer):
                self._fill("video", layer, ("name", "width", "height", "x", "y"))
                self._edits["video.aspect_locked"].setChecked(layer.aspect_locked)
                self.setCurrentWidget(self._video_page)
            elif isinstance(layer, TextLayer):
                self._fill("text", layer, ("name", "text", "font_size", "x", "y"))
                self._edits["text.font_family"].setCurrentText(layer.font_family)
                self._edits["text.bold"].setChecked(layer.bold)
                self._edits["text.italic"].setChecked(layer.italic)
                btn = self._edits["text.color"]
                btn.setText(layer.color)
                btn.setStyleSheet(f"QToolButton {{ background:{layer.color}; border:1px solid #444; color:#000; padding:4px; }}")
                self.setCurrentWidget(self._text_page)
            else:
                self.setCurrentIndex(0)
        finally:
            for w in self._edits.values():
                w.blockSignals(False)

    def _fill(self, prefix: str, layer: Layer, names) -> None:
        for name in names:
            edit = self._edits[f"{prefix}.{name}"]
            if edit.hasFocus():
                continue
            value = getattr(layer, name)
            edit.setText(str(round(value)) if isinstance(value, float) else str(value))


class CanvasSettings(QtWidgets.QGroupBox):
    """Template and grid controls."""
    openTemplateRequested = QtCore.Signal()

    def __init__(self, controller: ComposerController, parent=None):
        super().__init__("Canvas", parent)
        self.controller = controller
        form = QtWidgets.QFormLayout(self)

        tpl_row = QtWidgets.QHBoxLayout()
        self.open_btn = QtWidgets.QPushButton(qta.icon("fa5s.image", color=Theme.icon_idle.name()), "Template…")
        self.open_btn.clicked.connect(self.openTemplateRequested)
        self.clear_btn = QtWidgets.QPushButton("Clear")
        self.clear_btn.clicked.connect(controller.clear_template)
        tpl_row.addWidget(self.open_btn, 1)
        tpl_row.addWidget(self.clear_btn)
        form.addRow(tpl_row)

        self.size_label = QtWidgets.QLabel()
        form.addRow("Size", self.size_label)

        self.opacity = QtWidgets.QSlider(QtCore.Qt.Horizontal)
        self.opacity.setRange(0, 100)
        self.opacity.valueChanged.connect(lambda v: controller.set_template_opacity(v / 100.0))
        form.addRow("Template opacity", self.opacity)

        grid_row = QtWidgets.QHBoxLayout()
        self.show_grid = QtWidgets.QCheckBox("Grid")
        self.show_grid.toggled.connect(controller.set_show_grid)
        self.snap = QtWidgets.QCheckBox("Snap")
        self.snap.toggled.connect(controller.set_snap_to_grid)
        self.grid_size = QtWidgets.QLineEdit()
        self.grid_size.setFixedWidth(60)
        self.grid_size.editingFinished.connect(lambda: controller.set_grid_size(self.grid_size.text()))
        grid_row.addWidget(self.show_grid)
        grid_row.addWidget(self.snap)
        grid_row.addStretch(1)
        grid_row.addWidget(self.grid_size)
        form.addRow(grid_row)

    def sync(self, state: ComposerState) -> None:
        for w in (self.opacity, self.show_grid, self.snap, self.grid_size):
            w.blockSignals(True)
        self.size_label.setText(f"{round(state.canvas.width)} × {round(state.canvas.height)}")
        self.clear_btn.setEnabled(state.template_present)
        self.opacity.setValue(int(round(state.template_opacity * 100)))
        self.show_grid.setChecked(state.show_grid)
        self.snap.setChecked(state.snap_to_grid)
        if not self.grid_size.hasFocus():
            self.grid_size.setText(str(round(state.grid_size)))
        for w in (self.opacity, self.show_grid, self.snap, self.grid_size):
            w.blockSignals(False)


class LayerPanel(QtWidgets.QWidget):
    openTemplateRequested = QtCore.Signal()

    def __init__(self, controller: ComposerController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.setMinimumWidth(360)

        self.canvas_settings = CanvasSettings(controller, self)
        self.canvas_settings.openTemplateRequested.connect(self.openTemplateRequested)

        add_row = QtWidgets.QHBoxLayout()
        add_video = QtWidgets.QPushButton(qta.icon("fa5s.plus", color=Theme.icon_idle.name()), "Video")
        add_video.clicked.connect(controller.add_video)
        add_text = QtWidgets.QPushButton(qta.icon("fa5s.plus", color=Theme.icon_idle.name()), "Text")
        add_text.clicked.connect(controller.add_text)
        add_row.addWidget(add_video)
        add_row.addWidget(add_text)

        self._rows_host = QtWidgets.QWidget()
        self._rows = QtWidgets.QVBoxLayout(self._rows_host)
        self._rows.setContentsMargins(0, 0, 0, 0)
        self._rows.setSpacing(4)
        self._rows.addStretch(1)
        self._rows_key = None
        scroll = QtWidgets.QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._rows_host)
        scroll.setStyleSheet(f"QScrollArea {{ background:{Theme.panel.name()}; border:0; }}")

        self.properties = LayerProperties(controller, self)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.addWidget(self.canvas_settings)
        layout.addLayout(add_row)
        layout.addWidget(QtWidgets.QLabel("Layers"))
        layout.addWidget(scroll, 1)
        layout.addWidget(self.properties)

        controller.stateChanged.connect(self._on_state)
        self._on_state(controller.state)

    @QtCore.Slot(object)
    def _on_state(self, state: ComposerState) -> None:
        self.canvas_settings.sync(state)
        self._rebuild_rows(state)
        self.properties.show_layer(state.selected)

    def _rebuild_rows(self, state: ComposerState) -> None:
        # Drags only move geometry; skip the rebuild unless the list itself changed
        key = (state.selected_id, tuple((l.id, l.name, l.visible, l.z_index) for l in state.layers))
        if key == self._rows_key:
            return
        self._rows_key = key
        while self._rows.count() > 1:
            item = self._rows.takeAt(0)
            w = item.widget()
            if w is not None:
                w.deleteLater()
        c = self.controller
        for i, layer in enumerate(layers_top_down(state)):
            row = LayerRow(layer, layer.id == state.selected_id)
            row.selectRequested.connect(c.select)
            row.visibilityToggled.connect(lambda lid, v: c.update_layer(lid, visible=v))
            row.raiseRequested.connect(c.move_up)
            row.lowerRequested.connect(c.move_down)
            row.duplicateRequested.connect(c.duplicate)
            row.resetRequested.connect(c.reset)
            row.deleteRequested.connect(c.remove)
            self._rows.insertWidget(i, row)
