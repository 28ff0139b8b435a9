# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/services/__init__.py
