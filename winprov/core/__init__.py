# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/core/__init__.py
