# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for the school access service.

This package contains shared infrastructure-free building blocks:
- config: Application configuration and settings
"""
