# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/bootstrap/__init__.py
from .document import BootstrapDocument, write_tsid

__all__ = ["BootstrapDocument", "write_tsid"]
