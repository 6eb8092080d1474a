# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer.

Domains:
    access: Authorization and tenant isolation.
    auth: Login and bearer credential issuance.
    class_: Scoped class reads.
    student: Scoped student reads.
    school: Scoped school reads and overview counts.
    teacher: Teacher-specific reads.
    parent: Cross-school search for parents.
"""
