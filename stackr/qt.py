# stackr/qt.py
# Single import point for the Qt binding used by the desktop shell.
from PySide6 import QtCore, QtGui, QtWidgets

Signal = QtCore.Signal
Slot = QtCore.Slot
Property = QtCore.Property

__all__ = ["QtCore", "QtGui", "QtWidgets", "Signal", "Slot", "Property"]
