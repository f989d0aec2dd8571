# stackr/ui/main_window.py
from __future__ import annotations
import qtawesome as qta
from stackr.qt import QtCore, QtGui, QtWidgets
from stackr.core.config import get_settings
from stackr.core.document import ComposerState
from stackr.core.logging import get_logger
from stackr.ui.canvas_view import CanvasView
from stackr.ui.command_panel import CommandPanel
from stackr.ui.controller import ComposerController
from stackr.ui.layer_panel import LayerPanel
from stackr.ui.theme import Theme
from app_config import APP_NAME, IMAGE_EXTS


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self):
        super().__init__()
        self._log = get_logger(__name__)
        self.setWindowTitle(APP_NAME)
        self.setWindowIcon(qta.icon("fa5s.layer-group", color=Theme.accent.name()))
        self.resize(1280, 860)
        self.settings = get_settings()
        self._canvas_prefs: dict = {}

        self.controller = ComposerController(self._initial_state(), self)
        self.canvas = CanvasView(self.controller, self)
        self.layers = LayerPanel(self.controller, self)
        self.command = CommandPanel(self.controller, self)

        right_col = QtWidgets.QSplitter(QtCore.Qt.Vertical)
        right_col.addWidget(self.layers)
        right_col.addWidget(self.command)
        right_col.setStretchFactor(0, 3)
        right_col.setStretchFactor(1, 1)

        splitter = QtWidgets.QSplitter()
        splitter.addWidget(self.canvas)
        splitter.addWidget(right_col)
        splitter.setStretchFactor(0, 1)
        self.setCentralWidget(splitter)

        self.layers.openTemplateRequested.connect(self._open_template_dialog)
        self.command.downloadRequested.connect(self._save_command_dialog)
        self.controller.stateChanged.connect(self._remember_canvas_prefs)

        self._build_menu()
        self._restore_state()
        self._dev_seed_from_config()

    def _initial_state(self) -> ComposerState:
        s = self.settings
        return ComposerState(
            show_grid=s.canvas_default("show_grid"),
            snap_to_grid=s.canvas_default("snap_to_grid"),
            grid_size=s.canvas_default("grid_size"),
            template_opacity=s.canvas_default("template_opacity"),
        )

    def _build_menu(self):
        bar = self.menuBar()
        file_menu = bar.addMenu("&File")

        open_act = QtGui.QAction("Open &Template...", self)
        open_act.triggered.connect(self._open_template_dialog)
        file_menu.addAction(open_act)

        reset_act = QtGui.QAction("&Reset Canvas Size", self)
        reset_act.triggered.connect(self.controller.reset_canvas)
        file_menu.addAction(reset_act)

        save_act = QtGui.QAction("&Save Command...", self)
        save_act.setShortcut(QtGui.QKeySequence.Save)
        save_act.triggered.connect(self._save_command_dialog)
        file_menu.addAction(save_act)

        file_menu.addSeparator()
        exit_act = QtGui.QAction("E&xit", self)
        exit_act.triggered.connect(self.close)
        file_menu.addAction(exit_act)

        layer_menu = bar.addMenu("&Layer")
        add_video = QtGui.QAction("Add &Video", self)
        add_video.triggered.connect(self.controller.add_video)
        add_text = QtGui.QAction("Add &Text", self)
        add_text.triggered.connect(self.controller.add_text)
        dup = QtGui.QAction("&Duplicate", self)
        dup.setShortcut(QtGui.QKeySequence("Ctrl+D"))
        dup.triggered.connect(lambda: self._on_selected(self.controller.duplicate))
        delete = QtGui.QAction("De&lete", self)
        delete.setShortcut(QtGui.QKeySequence.Delete)
        delete.triggered.connect(lambda: self._on_selected(self.controller.remove))
        for a in (add_video, add_text, dup, delete):
            layer_menu.addAction(a)

    def _on_selected(self, action) -> None:
        sid = self.controller.state.selected_id
        if sid is not None:
            action(sid)

    def _open_template_dialog(self):
        patterns = " ".join(f"*{ext}" for ext in sorted(IMAGE_EXTS))
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, "Open template image", self.settings.get("paths/last_template_dir", ""),
            f"Images ({patterns})"
        )
        if not path:
            return
        self.settings.set("paths/last_template_dir", QtCore.QFileInfo(path).absolutePath())
        image = QtGui.QImage(path)
        if image.isNull():
            self._log.warning("Could not load template image %s", path)
            QtWidgets.QMessageBox.warning(self, APP_NAME, f"Could not load image:\n{path}")
            return
        self.canvas.set_template_image(image)
        self.controller.load_template(path, image.width(), image.height())

    def _save_command_dialog(self):
        if not self.controller.command:
            self.controller.generate()
        payload = self.controller.download()
        start = QtCore.QDir(self.settings.get("paths/last_export_dir", QtCore.QDir.homePath())).filePath(payload.filename)
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Save ffmpeg command", start, "Shell script (*.sh)")
        if not path:
            return
        self.settings.set("paths/last_export_dir", QtCore.QFileInfo(path).absolutePath())
        try:
            with open(path, "wb") as fh:
                fh.write(payload.encode())
        except OSError as ex:
            self._log.exception("Saving command to %s failed", path)
            QtWidgets.QMessageBox.warning(self, APP_NAME, f"Could not save:\n{ex}")
            return
        self._log.info("Saved command to %s", path)

    @QtCore.Slot(object)
    def _remember_canvas_prefs(self, state: ComposerState) -> None:
        prefs = {
            "canvas/show_grid": state.show_grid,
            "canvas/snap_to_grid": state.snap_to_grid,
            "canvas/grid_size": state.grid_size,
            "canvas/template_opacity": state.template_opacity,
        }
        # INI reads come back as strings, so compare against what was last written
        for key, value in prefs.items():
            if self._canvas_prefs.get(key) != value:
                self.settings.set(key, value)
        self._canvas_prefs = prefs

    def _restore_state(self):
        g = self.settings.get("ui/main_geometry")
        if isinstance(g, QtCore.QByteArray):
            self.restoreGeometry(g)

    def closeEvent(self, e: QtGui.QCloseEvent) -> None:
        self.settings.set("ui/main_geometry", self.saveGeometry())
        return super().closeEvent(e)

    def _dev_seed_from_config(self) -> None:
        """Seed a layout from app_config.DEV_LAYERS when DEV_MODE is on."""
        from app_config import DEV_MODE, DEV_LAYERS
        if not DEV_MODE:
            return
        c = self.controller
        for entry in DEV_LAYERS:
            if entry.get("type") == "text":
                c.add_text()
            else:
                c.add_video()
            fields = {k: v for k, v in entry.items() if k != "type"}
            c.update_layer(c.state.selected_id, **fields)
        c.select(None)
