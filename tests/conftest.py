"""Shared test setup: a QCoreApplication for Qt signal delivery."""

import os
import sys

from PyQt5.QtCore import QCoreApplication

sys.path.insert(0, os.path.join(os.path.dirname(__file__), os.pardir, "src"))

_app = QCoreApplication.instance() or QCoreApplication(["tubejoint-tests"])
