#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Loader configuration.

Rule: this file only holds constants/settings (no logic).
"""

# --- Files ---
TEXT_ENCODING = "utf-8"

# --- Network ---
URL_SCHEMES = ("http://", "https://")
HTTP_TIMEOUT_SECONDS = 10.0

# --- Layers ---
INT_GRID_EMPTY_VALUE = 0
