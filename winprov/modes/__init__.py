# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/modes/__init__.py
