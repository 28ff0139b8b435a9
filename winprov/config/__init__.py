# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/config/__init__.py
