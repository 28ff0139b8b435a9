# SPDX-License-Identifier: LGPL-3.0-or-later
# winprov/cli/__init__.py
