# SPDX-License-Identifier: MIT
"""Core build engine: model, staleness, compile, link and post-build."""
