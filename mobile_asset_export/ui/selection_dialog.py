"""
Export Size Selection Dialog
Checkbox panels for the Android and iOS presets plus Export/Cancel, and the
folder/document pickers used when the command line leaves them out.
"""

from typing import Dict, Optional

# Qt compatibility layer
try:
    from PySide6 import QtCore, QtWidgets
except ImportError as e:
    raise ImportError(
        "PySide6 not found. Install it to use the interactive dialog."
    ) from e

from mobile_asset_export.core import log
from mobile_asset_export.export.catalog import Platform, ScalePreset, presets_for
from mobile_asset_export.export.selection import SelectionSet

# Checkbox labels start with a non-breaking space
_NBSP = "\u00a0"


def ensure_app():
    """Return the running QApplication, creating one if needed."""
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app


class SelectionDialog(QtWidgets.QDialog):
    """
    Dialog for choosing export sizes.

    Each checkbox toggle replaces the current SelectionSet with a new value;
    selection() returns whatever value was current when asked.
    """

    def __init__(self, initial: Optional[SelectionSet] = None, parent=None):
        super().__init__(parent)
        self._selection = initial or SelectionSet()
        self.checkboxes: Dict[ScalePreset, QtWidgets.QCheckBox] = {}

        self.setWindowTitle("Select export sizes")
        self.setModal(True)

        self._setup_ui()

    def _setup_ui(self):
        layout = QtWidgets.QVBoxLayout(self)

        os_group = QtWidgets.QHBoxLayout()
        for platform in (Platform.ANDROID, Platform.IOS):
            os_group.addWidget(self._create_selection_panel(platform))
        layout.addLayout(os_group)

        button_layout = QtWidgets.QHBoxLayout()
        button_layout.addStretch()

        self.export_btn = QtWidgets.QPushButton("Export")
        self.export_btn.setDefault(True)
        self.export_btn.clicked.connect(self.accept)
        button_layout.addWidget(self.export_btn)

        self.cancel_btn = QtWidgets.QPushButton("Cancel")
        self.cancel_btn.clicked.connect(self.reject)
        button_layout.addWidget(self.cancel_btn)

        layout.addLayout(button_layout)

    def _create_selection_panel(self, platform: Platform) -> QtWidgets.QGroupBox:
        panel = QtWidgets.QGroupBox(platform.display_name)
        panel_layout = QtWidgets.QVBoxLayout(panel)
        panel_layout.setAlignment(
            QtCore.Qt.AlignmentFlag.AlignLeft | QtCore.Qt.AlignmentFlag.AlignTop
        )
        for preset in presets_for(platform):
            cb = QtWidgets.QCheckBox(_NBSP + preset.label)
            cb.setChecked(preset in self._selection)
            cb.toggled.connect(
                lambda checked, p=preset: self._on_toggled(p, checked)
            )
            panel_layout.addWidget(cb)
            self.checkboxes[preset] = cb
        return panel

    def _on_toggled(self, preset: ScalePreset, checked: bool):
        self._selection = self._selection.toggle(preset, checked)
        log.debug(f"Selection: {[p.label for p in self._selection]}")

    def selection(self) -> SelectionSet:
        return self._selection


def run_selection_dialog(
    parent=None, initial: Optional[SelectionSet] = None
) -> Optional[SelectionSet]:
    """
    Show the selection dialog modally.

    Returns:
        The selection at the time Export was clicked, or None on Cancel
    """
    ensure_app()
    dialog = SelectionDialog(initial=initial, parent=parent)
    if dialog.exec() == QtWidgets.QDialog.DialogCode.Accepted:
        return dialog.selection()
    log.info("Export cancelled")
    return None


def choose_destination_folder(parent=None) -> Optional[str]:
    """Ask for the export directory; None if the user cancels."""
    ensure_app()
    folder = QtWidgets.QFileDialog.getExistingDirectory(
        parent, "Select export directory"
    )
    return folder or None


def choose_source_document(parent=None) -> Optional[str]:
    """Ask for the SVG document to export; None if the user cancels."""
    ensure_app()
    path, _ = QtWidgets.QFileDialog.getOpenFileName(
        parent, "Select source document", "", "SVG documents (*.svg)"
    )
    return path or None


__all__ = [
    "SelectionDialog",
    "run_selection_dialog",
    "choose_destination_folder",
    "choose_source_document",
]
